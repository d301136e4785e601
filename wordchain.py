# wordchain.py
# UI-agnostic engine for the "word chain" game
# Rules:
# - User chooses a chain length N (1-4 in the app).
# - A starting word is chosen at random, but only one that has a next move.
# - Each new word must start with the last N letters of the current word,
#   must be in the dictionary and must not have been played before.
# - Score = number of accepted words after the starting word.
# - The game ends as soon as no unused word starts with the required letters.
# - Example (N=2): apple -> lemon -> once -> ...
#
# This module is UI-agnostic (no input/print in core logic).
# You can import WordChainGame in a GUI, or run the CLI at the bottom for quick play.

from __future__ import annotations

import bisect
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

MAX_START_ATTEMPTS = 100


class EmptyDictionary(ValueError):
    """Raised when a word is requested from a dictionary with no entries."""


class NoStartWordAvailable(ValueError):
    """Raised when no playable starting word was found within the attempt bound."""


# -------------------------
# Utilities
# -------------------------

def normalize_word(word: Optional[str]) -> str:
    return (word or "").strip().lower()


def parse_word_list(raw: str) -> List[str]:
    """
    Parse newline-delimited dictionary content into lowercase words.
    Lines that are empty after trimming are dropped.
    """
    words = [normalize_word(line) for line in raw.splitlines()]
    return [w for w in words if w]


def trailing(word: str, n: int) -> str:
    """
    Last `n` letters of `word` (the whole word when it is shorter).
    Example: trailing("apple", 2) -> "le"
    """
    return word[-n:]


# -------------------------
# Dictionary
# -------------------------

class Dictionary:
    """
    Immutable set of lowercase words.

    Membership is backed by a frozenset; prefix queries bisect into a sorted
    copy, so a dead-end check only visits the words that share the prefix.
    """

    def __init__(self, words: Iterable[str] = ()):
        self._words: frozenset = frozenset(w for w in map(normalize_word, words) if w)
        self._sorted: Tuple[str, ...] = tuple(sorted(self._words))

    @classmethod
    def from_text(cls, raw: str) -> "Dictionary":
        return cls(parse_word_list(raw))

    @classmethod
    def from_file(cls, path: Path) -> "Dictionary":
        raw = Path(path).read_text(encoding="utf-8", errors="ignore")
        return cls.from_text(raw)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sorted)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        w = normalize_word(word)
        return bool(w) and w in self._words

    def has_word_with_prefix_excluding(self, prefix: str, excluded: Iterable[str] = ()) -> bool:
        """
        True if some word starts with `prefix` and is not in `excluded`.
        The empty prefix matches every word.
        """
        prefix = prefix.lower()
        if not isinstance(excluded, (set, frozenset)):
            excluded = set(excluded)

        i = bisect.bisect_left(self._sorted, prefix)
        while i < len(self._sorted):
            w = self._sorted[i]
            if not w.startswith(prefix):
                break
            if w not in excluded:
                return True
            i += 1
        return False

    def sample_random(self, rng: Optional[random.Random] = None) -> str:
        if not self._sorted:
            raise EmptyDictionary("The dictionary has no words.")
        return (rng or random).choice(self._sorted)


# -------------------------
# Chain feasibility
# -------------------------

@dataclass(frozen=True)
class ChainEngine:
    """Stateless rule checks over a loaded Dictionary."""

    dictionary: Dictionary
    max_attempts: int = MAX_START_ATTEMPTS
    rng: Optional[random.Random] = None

    def is_valid_word(self, word: str) -> bool:
        return self.dictionary.contains(word)

    def has_next_word(self, suffix: str, used_words: Iterable[str]) -> bool:
        return self.dictionary.has_word_with_prefix_excluding(suffix, used_words)

    def pick_playable_start_word(
        self, chain_length: int, used_words: Iterable[str] = ()
    ) -> Optional[str]:
        """
        Sample up to `max_attempts` random words and return the first one that
        does not end the game on its own. Returns None when every attempt fails.
        """
        if not len(self.dictionary):
            return None

        used: Set[str] = set(used_words)
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.dictionary.sample_random(self.rng)
            suffix = trailing(candidate, chain_length)
            if self.has_next_word(suffix, used | {candidate}):
                logger.debug("Start word %r found after %d attempt(s)", candidate, attempt)
                return candidate

        logger.debug(
            "No playable start word after %d attempts (chain length %d)",
            self.max_attempts, chain_length,
        )
        return None


# -------------------------
# Game session
# -------------------------

class RejectionReason(str, Enum):
    WORD_NOT_FOUND = "word_not_found"
    WORD_ALREADY_USED = "word_already_used"
    PREFIX_MISMATCH = "prefix_mismatch"
    TOO_SHORT = "too_short"
    GAME_ALREADY_OVER = "game_already_over"


@dataclass(frozen=True)
class SessionSnapshot:
    current_word: str
    used_words: Tuple[str, ...]
    score: int
    chain_length: int
    is_over: bool

    @property
    def required_prefix(self) -> str:
        return trailing(self.current_word, self.chain_length)


@dataclass
class MoveResult:
    accepted: bool
    snapshot: SessionSnapshot
    reason: Optional[RejectionReason] = None
    message: str = ""
    game_over: bool = False


@dataclass
class WordChainGame:
    dictionary: Dictionary
    max_start_attempts: int = MAX_START_ATTEMPTS
    rng: Optional[random.Random] = None

    # internal state (set on new_game)
    chain_length: Optional[int] = field(default=None, init=False)
    current_word: Optional[str] = field(default=None, init=False)
    score: int = field(default=0, init=False)
    status: str = field(default="idle", init=False)  # "idle" | "playing" | "over"
    _used_words: List[str] = field(default_factory=list, init=False)
    _used_set: Set[str] = field(default_factory=set, init=False)

    @property
    def engine(self) -> ChainEngine:
        return ChainEngine(self.dictionary, max_attempts=self.max_start_attempts, rng=self.rng)

    @property
    def is_over(self) -> bool:
        return self.status == "over"

    # ------------- lifecycle -------------

    def new_game(self, chain_length: int) -> SessionSnapshot:
        """
        Start a new session with a random, playable starting word.
        On failure the previous session is left exactly as it was.
        """
        if not isinstance(chain_length, int) or chain_length <= 0:
            raise ValueError("Please choose a positive chain length.")

        start = self.engine.pick_playable_start_word(chain_length)
        if start is None:
            raise NoStartWordAvailable(
                f"Could not find a playable starting word for chain length {chain_length}. "
                "The word list may be too small; try again or pick a shorter chain."
            )

        self.chain_length = chain_length
        self.current_word = start
        self.score = 0
        self.status = "playing"
        self._used_words = [start]
        self._used_set = {start}
        return self.snapshot()

    def restore(self, snapshot: SessionSnapshot) -> SessionSnapshot:
        """
        Replace the session with the one described by `snapshot`.
        """
        used = list(snapshot.used_words)
        if snapshot.chain_length <= 0:
            raise ValueError("Chain length must be positive.")
        if not used or used[-1] != snapshot.current_word:
            raise ValueError("The current word must be the last used word.")
        if len(set(used)) != len(used):
            raise ValueError("Used words must not repeat.")
        if snapshot.score != len(used) - 1:
            raise ValueError("Score must equal the number of words played after the start.")

        self.chain_length = snapshot.chain_length
        self.current_word = snapshot.current_word
        self.score = snapshot.score
        self.status = "over" if snapshot.is_over else "playing"
        self._used_words = used
        self._used_set = set(used)
        return self.snapshot()

    # ------------- gameplay -------------

    def submit(self, raw_input: str) -> MoveResult:
        """
        Submit a word. Checks run in a fixed order and the first failure is
        reported: not in dictionary, already used, wrong prefix, too short.
        An accepted word that leaves no continuation ends the game in the
        same call (`game_over=True`).
        """
        if self.status == "idle" or self.chain_length is None or self.current_word is None:
            raise RuntimeError("Start a new game first.")

        if self.is_over:
            return self._reject(RejectionReason.GAME_ALREADY_OVER, "The game is over. Start a new game.")

        guess = normalize_word(raw_input)
        prefix = trailing(self.current_word, self.chain_length)
        engine = self.engine

        if not engine.is_valid_word(guess):
            return self._reject(RejectionReason.WORD_NOT_FOUND, "Word not found.")
        if guess in self._used_set:
            return self._reject(RejectionReason.WORD_ALREADY_USED, "Word already used.")
        if not guess.startswith(prefix):
            return self._reject(RejectionReason.PREFIX_MISMATCH, f'Must start with "{prefix}".')
        if len(guess) < self.chain_length:
            return self._reject(RejectionReason.TOO_SHORT, f"At least {self.chain_length} letters.")

        self.score += 1
        self._used_words.append(guess)
        self._used_set.add(guess)
        self.current_word = guess

        if not engine.has_next_word(trailing(guess, self.chain_length), self._used_set):
            self.status = "over"
            logger.info(
                "Game over at %r: score %d with chain length %d",
                guess, self.score, self.chain_length,
            )
            return MoveResult(
                accepted=True,
                snapshot=self.snapshot(),
                message="No more words available. Game over.",
                game_over=True,
            )

        return MoveResult(accepted=True, snapshot=self.snapshot(), message="Word accepted!")

    def _reject(self, reason: RejectionReason, message: str) -> MoveResult:
        return MoveResult(
            accepted=False,
            snapshot=self.snapshot(),
            reason=reason,
            message=message,
            game_over=self.is_over,
        )

    # ------------- accessors -------------

    def snapshot(self) -> SessionSnapshot:
        if self.chain_length is None or self.current_word is None:
            raise RuntimeError("Start a new game first.")
        return SessionSnapshot(
            current_word=self.current_word,
            used_words=tuple(self._used_words),
            score=self.score,
            chain_length=self.chain_length,
            is_over=self.is_over,
        )

    def history(self) -> List[str]:
        return list(self._used_words)


# -------------------------
# Optional: tiny CLI for quick testing
# -------------------------

def _cli():
    """
    Quick terminal game for manual testing (kept minimal):
    - Run:  python wordchain.py words.txt
    - Without a file the word list is downloaded.
    """
    import sys
    from providers import FileWordListProvider, OnlineWordListProvider

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        provider = FileWordListProvider(Path(sys.argv[1]))
    else:
        provider = OnlineWordListProvider()

    try:
        dictionary = provider.load()
    except ValueError as e:
        print(f"[!] {e}")
        sys.exit(1)

    game = WordChainGame(dictionary)

    print("Welcome to WordChain!")
    while True:
        try:
            chain_length = int(input("Choose chain length (1-4): ").strip())
            game.new_game(chain_length)
        except ValueError as e:
            print(f"[!] {e}")
            continue
        break

    print(f"Starting word: {game.current_word}")
    while not game.is_over:
        prefix = trailing(game.current_word, game.chain_length)
        g = input(f'Next word (starts with "{prefix}"): ').strip()
        res = game.submit(g)
        if not res.accepted:
            print(f"[!] {res.message}")
            continue

        print(f"{res.message} Score: {game.score}")

    print(f"Final score: {game.score}")
    print("Chain:")
    print(" → ".join(game.history()))


if __name__ == "__main__":
    _cli()
