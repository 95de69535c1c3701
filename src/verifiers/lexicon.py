"""Dictionary of playable words."""

from pathlib import Path
from typing import FrozenSet, Iterable


class Lexicon:
    """
    Immutable, case-insensitive set of valid words.

    Words are stored lower-cased; lookups lower-case the query.
    """

    def __init__(self, words: Iterable[str]):
        self._words: FrozenSet[str] = frozenset(
            w.strip().lower() for w in words if w.strip()
        )

    @classmethod
    def from_text(cls, text: str) -> "Lexicon":
        """Build from newline-delimited words."""
        return cls(text.splitlines())

    @classmethod
    def from_file(cls, path: str | Path) -> "Lexicon":
        return cls.from_text(Path(path).read_text(encoding="utf-8"))

    def check_word(self, word: str) -> bool:
        """
        Returns True if `word` is in the lexicon.
        Returns False otherwise.
        """
        return word.lower() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.check_word(word)

    def __len__(self) -> int:
        return len(self._words)
