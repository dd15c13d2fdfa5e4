"""
Game Configuration Constants Module

Board geometry, presentation timing hints and the word-list source.
Everything the engine treats as a fixed rule of the game lives here.
"""

import json
import os
from typing import Dict, Final, Iterable, List, Optional

MAX_ROWS: Final[int] = 6
"""
Number of guess attempts (board rows) per game.
"""

WORD_LENGTH: Final[int] = 5
"""
Letters per word (board columns).
"""

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Presentation hints handed to clients with each scored row (milliseconds)
TILE_REVEAL_STAGGER_MS: Final[int] = 100
TILE_FLIP_MS: Final[int] = 250
OUTCOME_DELAY_MS: Final[int] = 1000

DEFAULT_WORD_LIST_PATH: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'wordles.json'
)

MALFORMED_WORD_POLICIES: Final[tuple] = ('reject', 'skip')


def load_word_list(path: Optional[str] = None) -> List[str]:
    """
    Load the raw word list from a JSON file.

    The file must hold a JSON array of strings. Entries are returned as-is;
    length and alphabet checks happen when the dictionary is built.

    Args:
        path: JSON file to read, defaults to the packaged wordles.json

    Returns:
        List[str]: raw entries in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not an array of strings
    """
    json_file_path = path or DEFAULT_WORD_LIST_PATH

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_file_path}: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not all(isinstance(word, str) for word in word_list):
        raise ValueError("Every word list entry must be a string")

    return word_list


def get_word_statistics(words: Iterable[str]) -> Dict:
    """
    Analyzes a word list and returns statistical information.

    Returns:
        dict: total_words, avg_vowel_count, letter_frequency and the five
        most common letters
    """
    word_list = [word.upper() for word in words]
    if not word_list:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in word_list)

    letter_frequency: Dict[str, int] = {}
    for word in word_list:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(word_list),
        "avg_vowel_count": round(total_vowels / len(word_list), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
