from __future__ import annotations

import logging
import threading
from functools import lru_cache
from pathlib import Path

import numpy as np

from seedgen.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class LexiconError(ValueError):
    pass


@lru_cache(maxsize=None)
def _read_corpus(path: Path) -> tuple[str, ...]:
    logger.debug("Loading lexicon %s", path)
    text = path.read_text(encoding="utf-8")
    entries = tuple(line.strip() for line in text.splitlines() if line.strip())
    if not entries:
        raise LexiconError(f"lexicon {path} is empty")
    return entries


def load_lexicon(path) -> tuple[str, ...]:
    """Load a newline-delimited corpus once per process; blank lines are dropped."""
    return _read_corpus(Path(path).resolve())


class LexiconProvider:
    """
    Serves tokens from two immutable corpora:
      - names, handed out round-robin
      - words, sampled uniformly with replacement

    Each provider owns its own names cursor, so independent pipelines
    should each build their own provider.
    """

    def __init__(
        self,
        names: tuple[str, ...],
        words: tuple[str, ...],
        rng: np.random.Generator | None = None,
    ) -> None:
        if not names or not words:
            raise LexiconError("names and words corpora must both be non-empty")
        self.names = tuple(names)
        self.words = tuple(words)
        self.rng = rng if rng is not None else np.random.default_rng()
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, cfg: Settings = default_settings, rng: np.random.Generator | None = None
    ) -> "LexiconProvider":
        return cls(load_lexicon(cfg.names_path), load_lexicon(cfg.words_path), rng=rng)

    def next_name(self) -> str:
        with self._lock:
            name = self.names[self._cursor]
            self._cursor = (self._cursor + 1) % len(self.names)
        return name

    def random_words(self, n: int = 1) -> str:
        if n < 1:
            raise ValueError(f"random_words needs n >= 1, got {n}")
        idx = self.rng.integers(0, len(self.words), size=n)
        return " ".join(self.words[i] for i in idx)
