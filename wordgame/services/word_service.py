"""
Word Service

Dictionary loading and validation, and secret word selection.
"""

import random
from typing import Callable, FrozenSet, Iterable, Optional, Sequence, Tuple

from ..config.app_config import Config
from ..config.game_settings import WORD_LENGTH, MALFORMED_WORD_POLICIES, load_word_list
from ..models.errors import EmptyDictionary, MalformedWord
from ..utils.game_logger import game_logger

Chooser = Callable[[Sequence[str]], str]


def is_well_formed(word: str) -> bool:
    """True for exactly five ASCII letters."""
    return len(word) == WORD_LENGTH and word.isascii() and word.isalpha()


class Dictionary:
    """
    Immutable set of five-letter words.

    Words are stored lowercase; membership checks are case-insensitive.
    """

    def __init__(self, words: Iterable[str]):
        self._words: FrozenSet[str] = frozenset(word.lower() for word in words)
        self._ordered: Tuple[str, ...] = tuple(sorted(self._words))

    @classmethod
    def from_words(cls, words: Iterable[str], policy: str = "reject") -> "Dictionary":
        """
        Validate raw entries and build a dictionary.

        Args:
            words: raw entries, surrounding whitespace is ignored
            policy: "reject" raises on any malformed entry, "skip" drops them

        Raises:
            MalformedWord: policy is "reject" and some entry is malformed
            EmptyDictionary: nothing usable remains
            ValueError: unknown policy
        """
        if policy not in MALFORMED_WORD_POLICIES:
            raise ValueError(f"Unknown malformed word policy: {policy!r}")

        cleaned = [word.strip() for word in words]
        malformed = [word for word in cleaned if not is_well_formed(word)]

        if malformed:
            if policy == "reject":
                raise MalformedWord(malformed)
            game_logger.logger.warning(
                f"Skipping {len(malformed)} malformed dictionary entries"
            )

        valid = [word for word in cleaned if is_well_formed(word)]
        if not valid:
            raise EmptyDictionary()

        return cls(valid)

    def __contains__(self, word) -> bool:
        return isinstance(word, str) and word.lower() in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self):
        return iter(self._ordered)

    @property
    def words(self) -> Tuple[str, ...]:
        """Lowercase words in sorted order."""
        return self._ordered


def pick_secret_word(dictionary: Dictionary, chooser: Chooser = random.choice) -> str:
    """
    Select a secret word uniformly at random.

    Args:
        dictionary: validated dictionary
        chooser: picks one element of a sequence; inject a deterministic one in tests

    Returns:
        str: the chosen word, uppercase
    """
    if len(dictionary) == 0:
        raise EmptyDictionary()
    return chooser(dictionary.words).upper()


def load_dictionary(path: Optional[str] = None, policy: Optional[str] = None) -> Dictionary:
    """Load and validate the configured word list."""
    path = path or Config.WORD_LIST_PATH
    policy = policy or Config.MALFORMED_WORD_POLICY

    dictionary = Dictionary.from_words(load_word_list(path), policy)
    game_logger.logger.info(f"Dictionary loaded: {len(dictionary)} words (policy={policy})")
    return dictionary
