# bot.py
import sys
import logging

import discord

from app import create_app, start_status_server
from chatbot import ChatBot
from config import ConfigError, load_settings
from store import HistoryStore

log = logging.getLogger(__name__)


def build_intents():
    intents = discord.Intents.default()
    intents.guilds = True
    intents.members = True
    intents.guild_messages = True
    intents.message_content = True
    intents.presences = True
    return intents


class BabbleClient(discord.Client):
    def __init__(self, chatbot, **kwargs):
        super().__init__(intents=build_intents(), **kwargs)
        self.chatbot = chatbot

    async def on_ready(self):
        self.chatbot.user_id = self.user.id
        log.info("Bot is online! Logged in as %s (%s)", self.user, self.user.id)

    async def on_message(self, message):
        await self.chatbot.handle(message)

    async def close(self):
        await self.chatbot.shutdown()
        await super().close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s :: %(message)s")
    try:
        settings = load_settings()
        token = settings.require_token()
    except ConfigError as e:
        log.critical("%s", e)
        return 1
    logging.getLogger().setLevel(settings.log_level)

    store = HistoryStore.from_settings(settings)
    store.load()
    chatbot = ChatBot(store)

    if settings.status_port:
        start_status_server(create_app(chatbot), settings.status_port)

    client = BabbleClient(chatbot)
    client.run(token, log_handler=None)
    return 0


if __name__ == '__main__':
    sys.exit(main())
