# config.py
import os
import json
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LEARNED_WORDS_FILE = 'learned_words.json'
FOREIGN_WORDS_FILE = 'german_words.json'
HISTORY_FILE = 'messageHistory.json'
LEGACY_CONFIG_FILE = 'config.json'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    token: Optional[str]
    data_dir: str
    history_limit: Optional[int] = None
    status_port: Optional[int] = None
    log_level: str = 'INFO'

    @property
    def learned_words_file(self) -> str:
        return os.path.join(self.data_dir, LEARNED_WORDS_FILE)

    @property
    def foreign_words_file(self) -> str:
        return os.path.join(self.data_dir, FOREIGN_WORDS_FILE)

    @property
    def history_file(self) -> str:
        return os.path.join(self.data_dir, HISTORY_FILE)

    def require_token(self) -> str:
        if not self.token:
            raise ConfigError("DISCORD_TOKEN is not set (env, .env or config.json)")
        return self.token


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, '').strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    return value if value > 0 else None


def _legacy_token(data_dir: str) -> Optional[str]:
    # older deployments kept the token in config.json next to the data files
    path = os.path.join(data_dir, LEGACY_CONFIG_FILE)
    if not os.path.exists(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None
    token = data.get('token') if isinstance(data, dict) else None
    return token if isinstance(token, str) and token.strip() else None


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)
    data_dir = os.getenv('BOT_DATA_DIR', '').strip() or BASE_DIR
    token = os.getenv('DISCORD_TOKEN', '').strip() or _legacy_token(data_dir)
    log_level = os.getenv('BOT_LOG_LEVEL', 'INFO').strip().upper() or 'INFO'
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"BOT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
    return Settings(
        token=token,
        data_dir=data_dir,
        history_limit=_optional_int('BOT_HISTORY_LIMIT'),
        status_port=_optional_int('BOT_STATUS_PORT'),
        log_level=log_level,
    )
