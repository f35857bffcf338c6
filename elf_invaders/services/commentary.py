"""
Round-End Commentary
====================

Asks a remote text model for a short festive comment on the player's
performance once a round ends.

The simulation never waits on this: request_async() runs the HTTP call on
a daemon thread and hands the result to a callback. Every failure path
(no key, network error, unexpected payload) turns into a fixed fallback
string, so the caller always gets something printable.
"""

import os
import threading
from typing import Callable, Optional

import requests

from ..config import Config
from ..utils.logger import get_logger


logger = get_logger(__name__)


FALLBACK_NO_KEY = "Santa is currently feeding the reindeer (No API Key)."
FALLBACK_ERROR = "Santa's communication lines are frozen! (API Error)"
FALLBACK_EMPTY = "Ho ho ho! Merry gaming!"

PROMPT_TEMPLATE = """
You are Santa Claus.
A player just finished playing "Elf Invaders" (a Space Invaders clone where elves rebelled).
Their Score: {score}.
Result: {result}

Write a very short (max 2 sentences), funny, festive comment evaluating their performance for the "Naughty or Nice" list.
Use emojis.
"""


def build_prompt(score: int, won: bool) -> str:
    result = "They saved Christmas!" if won else "The elves took over."
    return PROMPT_TEMPLATE.format(score=score, result=result)


class CommentaryService:
    """
    Client for the generateContent endpoint.

    Args:
        config: Provides model, endpoint, timeout and key variable names
        api_key: Explicit key; falls back to the environment when None
        session: requests session (injectable for tests)
    """

    def __init__(self, config: Optional[Config] = None, api_key: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or Config()
        self._api_key = api_key
        self.session = session or requests.Session()

    @property
    def api_key(self) -> Optional[str]:
        if self._api_key:
            return self._api_key
        for var in self.config.COMMENTARY_KEY_VARS:
            value = os.environ.get(var)
            if value:
                return value
        return None

    @property
    def url(self) -> str:
        return f"{self.config.COMMENTARY_ENDPOINT}/{self.config.COMMENTARY_MODEL}:generateContent"

    def fetch(self, score: int, won: bool) -> str:
        """Blocking fetch. Always returns a string."""
        api_key = self.api_key
        if not api_key:
            logger.info("No commentary API key configured, using fallback")
            return FALLBACK_NO_KEY

        payload = {'contents': [{'parts': [{'text': build_prompt(score, won)}]}]}
        try:
            response = self.session.post(
                self.url,
                params={'key': api_key},
                json=payload,
                timeout=self.config.COMMENTARY_TIMEOUT,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Commentary request failed: {e}")
            return FALLBACK_ERROR
        except ValueError as e:
            logger.warning(f"Commentary response was not JSON: {e}")
            return FALLBACK_ERROR

        try:
            parts = data['candidates'][0]['content']['parts']
            text = ''.join(part.get('text', '') for part in parts).strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning(f"Unexpected commentary payload: {e!r}")
            return FALLBACK_ERROR

        return text or FALLBACK_EMPTY

    def request_async(self, score: int, won: bool,
                      callback: Callable[[str], None]) -> threading.Thread:
        """Fetch on a daemon thread and pass the text to callback."""
        def worker() -> None:
            callback(self.fetch(score, won))

        thread = threading.Thread(target=worker, name='commentary', daemon=True)
        thread.start()
        return thread
