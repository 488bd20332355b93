# store.py
import os
import json
import shutil
import logging

log = logging.getLogger(__name__)


def _is_record(entry):
    return (
        isinstance(entry, dict)
        and isinstance(entry.get('content'), str)
        and isinstance(entry.get('timestamp'), (int, float))
        and not isinstance(entry.get('timestamp'), bool)
    )


def _validate_learned_words(data):
    if not isinstance(data, list):
        raise ValueError("expected a list of word objects")
    words = []
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get('word'), str):
            raise ValueError(f"bad learned word entry: {entry!r}")
        words.append(entry['word'])
    return words


def _validate_foreign_words(data):
    if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
        raise ValueError("expected a list of strings")
    return list(data)


def _validate_history(data):
    if not isinstance(data, dict):
        raise ValueError("expected an object keyed by user id")
    history = {}
    for user_id, records in data.items():
        if not isinstance(records, list) or not all(_is_record(r) for r in records):
            raise ValueError(f"bad history for user {user_id!r}")
        history[str(user_id)] = [
            {'content': r['content'], 'timestamp': int(r['timestamp'])} for r in records
        ]
    return history


class HistoryStore:
    """Learned words, foreign words and per-user message history.

    The three collections live in separate JSON files and are loaded and
    saved independently. Only the history is ever written back.
    """

    def __init__(self, learned_words_file, foreign_words_file, history_file, history_limit=None):
        self.learned_words_file = learned_words_file
        self.foreign_words_file = foreign_words_file
        self.history_file = history_file
        self.history_limit = history_limit
        self.learned_words = []
        self.foreign_words = []
        self.history = {}

    @classmethod
    def from_settings(cls, settings):
        return cls(
            settings.learned_words_file,
            settings.foreign_words_file,
            settings.history_file,
            history_limit=settings.history_limit,
        )

    def _load_file(self, path, validate, default):
        if not os.path.exists(path):
            log.info("%s not found, starting empty", os.path.basename(path))
            return default
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return validate(json.load(f))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            log.error("Error parsing %s: %s", os.path.basename(path), e)
            self._set_aside(path)
            return default

    def _set_aside(self, path):
        # keep the rejected file; the next save would overwrite it
        backup = path + '.bad'
        try:
            shutil.copyfile(path, backup)
        except OSError as e:
            log.error("Could not copy %s aside: %s", os.path.basename(path), e)
        else:
            log.warning("Copied unreadable %s to %s", os.path.basename(path), os.path.basename(backup))

    def load(self):
        self.learned_words = self._load_file(self.learned_words_file, _validate_learned_words, [])
        self.foreign_words = self._load_file(self.foreign_words_file, _validate_foreign_words, [])
        self.history = self._load_file(self.history_file, _validate_history, {})
        log.info(
            "Loaded %d learned words, %d foreign words, history for %d users",
            len(self.learned_words), len(self.foreign_words), len(self.history),
        )
        return self.learned_words, self.foreign_words, self.history

    def save(self):
        tmp = self.history_file + '.tmp'
        try:
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(self.history, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.history_file)
        except (OSError, TypeError, ValueError) as e:
            log.error("Error saving message history: %s", e)
            if os.path.exists(tmp):
                try:
                    os.remove(tmp)
                except OSError as rm_err:
                    log.error("Could not remove %s: %s", os.path.basename(tmp), rm_err)

    def record(self, user_id, content, timestamp):
        user_id = str(user_id)
        records = self.history.setdefault(user_id, [])
        records.append({'content': content, 'timestamp': int(timestamp)})
        # trim history
        if self.history_limit and len(records) > self.history_limit:
            del records[:-self.history_limit]

    def messages(self, user_id):
        return self.history.get(str(user_id), [])

