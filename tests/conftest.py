# tests/conftest.py
import json
import random
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from chatbot import ChatBot
from generator import ResponseGenerator
from store import HistoryStore
from translator import Translation, TranslationError

BOT_ID = 999


def make_user(user_id, name=None, bot=False):
    return SimpleNamespace(id=user_id, name=name or f"user{user_id}", bot=bot)


def make_member(status='online', avatar='https://cdn.example/avatar.png'):
    return SimpleNamespace(status=status, display_avatar=SimpleNamespace(url=avatar))


class FakeGuild:
    def __init__(self, cached=None, remote=None, me=None):
        self.cached = cached or {}
        self.me = me
        self.remote = remote or {}
        self.fetched = []

    def get_member(self, user_id):
        return self.cached.get(user_id)

    async def fetch_member(self, user_id):
        self.fetched.append(user_id)
        if user_id not in self.remote:
            raise LookupError(f"unknown member {user_id}")
        return self.remote[user_id]


class FakeMessage:
    def __init__(self, content, author, mentions=(), guild=None, system=False, created_at=None,
                 mention_everyone=False, role_mentions=()):
        self.content = content
        self.author = author
        self.mentions = list(mentions)
        self.mention_everyone = mention_everyone
        self.role_mentions = list(role_mentions)
        self.guild = guild
        self.system = system
        self.created_at = created_at or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.replies = []

    def is_system(self):
        return self.system

    async def reply(self, content=None, *, embed=None):
        self.replies.append(embed if embed is not None else content)


class FakeTranslator:
    def __init__(self, text='house', fail=False):
        self.text = text
        self.fail = fail
        self.calls = []

    async def translate(self, word, target, source):
        self.calls.append((word, target, source))
        if self.fail:
            raise TranslationError("quota exceeded")
        return Translation(text=self.text)


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / 'learned_words.json').write_text(
        json.dumps([{'word': w} for w in ['alpha', 'bravo', 'charlie', 'delta', 'echo', 'foxtrot']]),
        encoding='utf-8',
    )
    (tmp_path / 'german_words.json').write_text(json.dumps(['Haus']), encoding='utf-8')
    return tmp_path


@pytest.fixture
def store(data_dir):
    s = HistoryStore(
        str(data_dir / 'learned_words.json'),
        str(data_dir / 'german_words.json'),
        str(data_dir / 'messageHistory.json'),
    )
    s.load()
    return s


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def make_bot(store, translator, tmp_path):
    script = tmp_path / 'bot.py'
    script.write_text("import discord\n\nprint('hi')\n", encoding='utf-8')

    def _make(babble_chance=0.0, delay_ms=(0, 0), seed=0):
        generator = ResponseGenerator(rng=random.Random(seed), babble_chance=babble_chance, delay_ms=delay_ms)
        bot = ChatBot(store, translator=translator, generator=generator, script_file=str(script))
        bot.user_id = BOT_ID
        return bot

    return _make
