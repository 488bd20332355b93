# chatbot.py
import os
import re
import time
import asyncio
import logging

import discord

import responses
from config import BASE_DIR
from cooldown import CooldownTracker
from generator import ResponseGenerator
from translator import MyMemoryTranslator, TranslationError

log = logging.getLogger(__name__)

SCRIPT_FILE = os.path.join(BASE_DIR, 'bot.py')
PRIMARY_LANGUAGE = 'en'
FOREIGN_LANGUAGE = 'de'


def word_frequencies(records):
    """(word, count) pairs, most frequent first, ties kept in first-seen order."""
    counts = {}
    for record in records:
        for word in record['content'].lower().split():
            counts[word] = counts.get(word, 0) + 1
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def most_and_least_used(records):
    ranked = word_frequencies(records)
    if not ranked:
        return responses.no_data, responses.no_data
    return ranked[0][0], ranked[-1][0]


def _kib(path):
    return f"{os.path.getsize(path) / 1024:.2f} KB"


class ChatBot:
    def __init__(self, store, translator=None, generator=None, cooldown=None, script_file=SCRIPT_FILE):
        self.store = store
        self.translator = translator or MyMemoryTranslator()
        self.generator = generator or ResponseGenerator()
        self.cooldown = cooldown or CooldownTracker()
        self.script_file = script_file
        self.user_id = None
        self._pending = set()
        self._build_rules()

    def _build_rules(self):
        # rules: (compiled_pattern, handler(message) -> reply, error reply)
        self.rules = [
            (re.compile(r"^!stats"), self._stats, responses.stats_error),
            (re.compile(r"^!viewfiles$"), self._view_files, responses.files_error),
            (re.compile(r"^!randomword german$"), self._random_word, responses.translate_error),
            (re.compile(r"^!help$"), self._help, responses.generic_error),
        ]

    @property
    def pending(self):
        return set(self._pending)

    # ----- commands -----
    async def _stats(self, message):
        target = message.mentions[0] if message.mentions else message.author
        guild = message.guild
        if guild is None:
            raise LookupError("stats are only available inside a server")
        member = guild.get_member(target.id) or await guild.fetch_member(target.id)
        status = str(member.status or 'offline')
        most_used, least_used = most_and_least_used(self.store.messages(target.id))

        embed = discord.Embed(
            title=f"{target.name}'s Stats",
            description=f"Here are the stats for {target.name}:",
        )
        embed.set_thumbnail(url=member.display_avatar.url)
        embed.add_field(name='Status', value=status.capitalize(), inline=True)
        embed.add_field(name='Most Used Word', value=most_used, inline=True)
        embed.add_field(name='Least Used Word', value=least_used, inline=True)
        return embed

    async def _view_files(self, message):
        with open(self.script_file, 'r', encoding='utf-8') as f:
            script_lines = len(f.read().splitlines())
        script_name = os.path.basename(self.script_file)

        embed = discord.Embed(
            title='File Sizes & Script Info',
            description='Here are the sizes of the bot files and the number of lines in the script:',
        )
        embed.add_field(name=os.path.basename(self.store.learned_words_file),
                        value=_kib(self.store.learned_words_file), inline=False)
        embed.add_field(name=os.path.basename(self.store.history_file),
                        value=_kib(self.store.history_file), inline=False)
        embed.add_field(name=f'Bot Script ({script_name})', value=_kib(self.script_file), inline=False)
        embed.add_field(name='Bot Script Lines', value=f'{script_lines} lines of code', inline=False)
        return embed

    async def _random_word(self, message):
        words = self.store.foreign_words
        if not words:
            return responses.no_foreign_words
        word = self.generator.choice(words)
        translation = await self.translator.translate(word, PRIMARY_LANGUAGE, FOREIGN_LANGUAGE)
        return responses.random_word_reply.format(word=word, translation=translation.text)

    async def _help(self, message):
        embed = discord.Embed(title=responses.help_title, description=responses.help_description)
        for name, value in responses.help_fields:
            embed.add_field(name=name, value=value, inline=False)
        return embed

    # ----- pipeline -----
    async def _reply(self, message, reply):
        if isinstance(reply, discord.Embed):
            await message.reply(embed=reply)
        elif reply:
            await message.reply(reply)

    async def _dispatch(self, message):
        for pattern, handler, error_reply in self.rules:
            if not pattern.match(message.content):
                continue
            try:
                await self._reply(message, await handler(message))
                continue
            except TranslationError as e:
                log.error("Error translating: %s", e)
            except Exception:
                log.exception("Error handling %s", pattern.pattern)
            try:
                await self._reply(message, error_reply)
            except discord.HTTPException as e:
                log.error("Error sending error reply: %s", e)

    def _mentions_me(self, message):
        if self.user_id is None:
            return False
        if any(u.id == self.user_id for u in message.mentions):
            return True
        if message.mention_everyone:
            return True
        me = message.guild.me if message.guild is not None else None
        if me is None or not message.role_mentions:
            return False
        my_roles = {role.id for role in me.roles}
        return any(role.id in my_roles for role in message.role_mentions)

    async def _deliver_babble(self, message, sentence, delay):
        await asyncio.sleep(delay)
        if not sentence.strip():
            return
        try:
            await message.reply(sentence)
        except discord.HTTPException as e:
            log.error("Error sending babble: %s", e)

    def _schedule_babble(self, message, sentence, delay):
        task = asyncio.create_task(self._deliver_babble(message, sentence, delay))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def handle(self, message, now=None):
        if message.author.bot or message.is_system():
            return
        author_id = str(message.author.id)
        now = now if now is not None else int(time.time() * 1000)
        if not self.cooldown.admit(author_id, now):
            return

        await self._dispatch(message)

        if self._mentions_me(message):
            sentence = self.generator.echo(self.store.messages(author_id))
            if sentence.strip():
                try:
                    await message.reply(sentence)
                except discord.HTTPException as e:
                    log.error("Error sending echo: %s", e)

        babble = self.generator.maybe_babble(self.store.learned_words)
        if babble:
            self._schedule_babble(message, *babble)

        timestamp = int(message.created_at.timestamp() * 1000)
        self.store.record(author_id, message.content, timestamp)
        self.store.save()

    async def shutdown(self):
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            log.info("Cancelled %d pending babble replies", len(pending))

    def get_history(self, user_id, limit=100):
        if not user_id or limit <= 0:
            return []
        return self.store.messages(user_id)[-limit:]
