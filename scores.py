# scores.py
# Small JSON-backed store for what the app remembers between sessions:
# - best score per chain length
# - light/dark theme preference
#
# The game engine never touches this; the app passes (score, chain length)
# in when a game ends and shows the result.

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")


class PreferenceStore:
    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    # ------------- high scores -------------

    def high_scores(self) -> Dict[int, int]:
        raw = self._read().get("highscores", {})
        scores: Dict[int, int] = {}
        for key, value in raw.items():
            try:
                scores[int(key)] = int(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring bad high score entry %r=%r in %s", key, value, self.path)
        return scores

    def high_score(self, chain_length: int) -> int:
        return self.high_scores().get(chain_length, 0)

    def record_score(self, score: int, chain_length: int) -> bool:
        """
        Store `score` if it beats the best for `chain_length`.
        Returns True for a new high score.
        """
        if score <= self.high_score(chain_length):
            return False

        data = self._read()
        data.setdefault("highscores", {})[str(chain_length)] = score
        self._write(data)
        logger.info("New high score %d for chain length %d", score, chain_length)
        return True

    # ------------- theme -------------

    @property
    def theme(self) -> str:
        theme = self._read().get("theme")
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}; choose one of {', '.join(THEMES)}.")
        data = self._read()
        data["theme"] = theme
        self._write(data)

    # ------------- file I/O -------------

    def _read(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read preferences from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file %s does not hold an object; ignoring it", self.path)
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=str(self.path.parent), prefix=".prefs-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
