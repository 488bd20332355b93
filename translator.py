# translator.py
import asyncio
import logging
from dataclasses import dataclass

import aiohttp

log = logging.getLogger(__name__)

MYMEMORY_URL = "https://api.mymemory.translated.net/get"


class TranslationError(Exception):
    pass


@dataclass
class Translation:
    text: str


def parse_response(data) -> Translation:
    """Turn a MyMemory JSON payload into a Translation or raise."""
    if not isinstance(data, dict):
        raise TranslationError("unexpected response payload")
    if data.get('responseStatus') != 200:
        raise TranslationError(data.get('responseDetails') or "translation failed")
    text = (data.get('responseData') or {}).get('translatedText') or ''
    if not text.strip():
        raise TranslationError("empty translation")
    return Translation(text=text)


class MyMemoryTranslator:
    """Free MyMemory API, no key required. Rate limited, so no retries."""

    def __init__(self, timeout: float = 10.0):
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def translate(self, word: str, target: str, source: str) -> Translation:
        params = {'q': word, 'langpair': f"{source}|{target}"}
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(MYMEMORY_URL, params=params) as response:
                    if response.status != 200:
                        raise TranslationError(f"API request failed ({response.status})")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TranslationError(str(e) or type(e).__name__) from e
        result = parse_response(data)
        log.debug("Translated %r (%s->%s) as %r", word, source, target, result.text)
        return result
