"""
Tribe Quest - Input Validation Utilities

Provides validation functions for game engine inputs. Setup validators either
return validated data or raise SetupError; the guess normalizer returns None
for input that should be ignored.
"""

from typing import Sequence

from tribe_quest.engine.base import SetupError, Team, Word


def validate_teams(teams: Sequence[Team] | None) -> tuple[Team, ...]:
    """
    Validate the teams taking part in a game.

    Args:
        teams: Teams in play order

    Returns:
        Validated teams as a tuple

    Raises:
        SetupError: If there are no teams or team ids repeat
    """
    if not teams:
        raise SetupError("No teams found. At least one team is required.")

    teams_tuple = tuple(teams)
    for i, team in enumerate(teams_tuple):
        if not isinstance(team, Team):
            raise SetupError(f"Team at index {i} must be a Team, got {type(team).__name__}.")

    ids = [team.id for team in teams_tuple]
    if len(set(ids)) != len(ids):
        raise SetupError(f"Team ids must be unique, got {ids}.")

    return teams_tuple


def validate_words(words: Sequence[Word] | None) -> tuple[Word, ...]:
    """
    Validate the quest words for a game.

    Args:
        words: Words in play order

    Returns:
        Validated words as a tuple

    Raises:
        SetupError: If there are no words
    """
    if not words:
        raise SetupError("No words found. At least one word is required.")

    words_tuple = tuple(words)
    for i, word in enumerate(words_tuple):
        if not isinstance(word, Word):
            raise SetupError(f"Word at index {i} must be a Word, got {type(word).__name__}.")

    return words_tuple


def normalize_guess(letter: object) -> str | None:
    """
    Normalize a guessed letter.

    Args:
        letter: Raw input from the presentation layer

    Returns:
        The uppercase letter, or None if the input is not a single ASCII letter
    """
    if not isinstance(letter, str):
        return None

    letter = letter.strip()
    if len(letter) != 1 or not (letter.isascii() and letter.isalpha()):
        return None

    return letter.upper()
