"""Content policy applied to job descriptions before any model call."""

import re
from typing import Iterable, Protocol

from services.errors import InappropriateContentError

DEFAULT_BLOCKED_TERMS: tuple[str, ...] = (
    "terrorist", "terrorism", "bomb", "explosive", "weapon", "attack", "kill",
    "murder", "illegal", "drug", "trafficking", "hack", "fraud", "scam",
    "violence", "extremist", "radical", "jihad", "isis", "al-qaeda", "bin laden",
    # compounds a whole-word match would miss
    "cyberattack", "bombmaking", "bomb-making",
)

# Inflections that still count as the blocked word ("bombs", "hacking", "illegally")
_SUFFIXES = r"(?:s|es|ed|ing|er|ers|ly)?"


class ContentPolicy(Protocol):
    def violation(self, text: str | None) -> str | None:
        """Return the offending term, or None if the text is acceptable."""
        ...

    def enforce(self, text: str | None) -> None:
        """Raise InappropriateContentError if the text violates the policy."""
        ...


class KeywordContentPolicy:
    """Case-insensitive whole-word denylist.

    Terms match on word boundaries so "kill" blocks "killing" but not "skills".
    """

    def __init__(self, terms: Iterable[str] = DEFAULT_BLOCKED_TERMS):
        self._terms = tuple(t.strip().lower() for t in terms if t and t.strip())
        self._patterns = [
            (term, re.compile(rf"\b{re.escape(term)}{_SUFFIXES}\b", re.IGNORECASE))
            for term in self._terms
        ]

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def violation(self, text: str | None) -> str | None:
        if not text:
            return None
        for term, pattern in self._patterns:
            if pattern.search(text):
                return term
        return None

    def enforce(self, text: str | None) -> None:
        term = self.violation(text)
        if term is not None:
            raise InappropriateContentError(term=term)
