import logging
import random
import time
from pathlib import Path
from typing import Optional

import requests

from wordchain import Dictionary

logger = logging.getLogger(__name__)

DEFAULT_WORDS_URL = "https://raw.githubusercontent.com/dwyl/english-words/master/words_alpha.txt"


class WordListUnavailable(ValueError):
    """Raised when a word list source cannot be read."""


class FileWordListProvider:
    """Loads a newline-delimited word list from disk, once."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._dictionary: Optional[Dictionary] = None

    def load(self) -> Dictionary:
        if self._dictionary is not None:
            return self._dictionary
        try:
            dictionary = Dictionary.from_file(self.path)
        except OSError as e:
            raise WordListUnavailable(f"Unable to read word list {self.path}: {e}") from e

        logger.info("Loaded %s words from %s", len(dictionary), self.path)
        self._dictionary = dictionary
        return dictionary


class OnlineWordListProvider:
    def __init__(self, url: str = DEFAULT_WORDS_URL, timeout: int = 10, *, max_retries: int = 5,
                 backoff_base: float = 0.5, backoff_factor: float = 1.5,
                 backoff_cap: float = 5.0):
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.backoff_factor = backoff_factor
        self.backoff_cap = backoff_cap
        # the word list is fetched once per provider instance
        self._dictionary: Optional[Dictionary] = None

    def fetch(self) -> Optional[str]:
        """
        Download the raw word list.
        Retries with backoff up to `max_retries` times; None when all attempts fail.
        """
        delay = self.backoff_base
        for attempt in range(1, self.max_retries + 1):
            try:
                response = requests.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                if response.text.strip():
                    return response.text
                logger.warning("Empty word list received from %s; retrying...", self.url)

            except requests.exceptions.Timeout:
                # server didn't respond in time; retry
                logger.warning("Timeout while fetching %s (attempt %d); retrying...", self.url, attempt)
            except requests.exceptions.RequestException as e:
                # any other network-related error; retry
                logger.warning("Network error fetching %s (attempt %d): %s; retrying...", self.url, attempt, e)

            if attempt == self.max_retries:
                break
            # jitter in [0, 0.1 * delay] to avoid thundering herd
            sleep_for = min(delay, self.backoff_cap) + random.uniform(0, 0.1 * max(delay, 0))
            time.sleep(sleep_for)
            delay = min(delay * self.backoff_factor, self.backoff_cap)

        return None

    def load(self) -> Dictionary:
        if self._dictionary is not None:
            return self._dictionary

        raw = self.fetch()
        if raw is None:
            raise WordListUnavailable(
                f"Unable to download the word list from {self.url}. Check your internet connection and try again."
            )

        dictionary = Dictionary.from_text(raw)
        logger.info("Loaded %s words from %s", len(dictionary), self.url)
        self._dictionary = dictionary
        return dictionary

    def clear_cache(self):
        self._dictionary = None
