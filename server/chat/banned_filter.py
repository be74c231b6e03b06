"""
Banned phrase filter.

Decides whether a chat line must be suppressed because it contains one of the
configured phrases. Matching is case-insensitive substring containment.
"""

from typing import Iterable

from server.utils.config import normalize_phrases


class BannedPhraseFilter:
    """Immutable set of lower-cased banned phrases."""

    def __init__(self, phrases: Iterable[str] = ()):
        self._phrases = normalize_phrases(phrases)

    @property
    def phrases(self) -> frozenset:
        return self._phrases

    def contains(self, message: str) -> bool:
        """Return True if the message contains any banned phrase."""
        lowered = message.lower()
        for phrase in self._phrases:
            if phrase in lowered:
                return True
        return False

    def __len__(self):
        return len(self._phrases)
