"""
game_logic.py - Core game logic for Cows and Bulls
"""

import random
import re

CODE_LENGTH = 4
MAX_ATTEMPTS = 10
DIGITS = '0123456789'

_GUESS_PATTERN = re.compile(r'[0-9]{4}')


class InvalidGuess(ValueError):
    """Base class for malformed guesses. The message is shown to the player."""


class InvalidFormat(InvalidGuess):
    def __init__(self, message='Input must be a 4-digit number.'):
        super().__init__(message)


class DuplicateDigits(InvalidGuess):
    def __init__(self, message='Digits must not repeat.'):
        super().__init__(message)


def make_random_source(seed=None):
    """Return a random source for secret generation; seed it for repeatable games."""
    return random.Random(seed)


def generate_secret(rng=None):
    """
    Generate a 4-digit secret with unique digits and a non-zero leading digit.

    The first digit is drawn from 1-9, the remaining three are sampled without
    replacement from whatever digits are left (0 included), so every valid
    secret is equally likely.
    """
    rng = rng or random
    first = rng.choice(DIGITS[1:])
    rest = rng.sample([d for d in DIGITS if d != first], CODE_LENGTH - 1)
    return first + ''.join(rest)


def check_guess(guess):
    """
    Check that the guess is exactly 4 decimal digits, all distinct.
    Returns the guess unchanged, raises InvalidFormat or DuplicateDigits.
    """
    if not isinstance(guess, str) or not _GUESS_PATTERN.fullmatch(guess):
        raise InvalidFormat()

    if len(set(guess)) != CODE_LENGTH:
        raise DuplicateDigits()

    return guess


def validate_number(number_str):
    """
    Validate that the input is a 4-digit number with all unique digits.
    Returns (is_valid: bool, error_message: str)
    """
    try:
        check_guess(number_str)
    except InvalidGuess as exc:
        return False, str(exc)
    return True, ''


def calculate_bulls_and_cows(secret, guess):
    """
    Calculate Bulls and Cows for a given guess against the secret number.

    Bull  = correct digit in correct position
    Cow   = correct digit in wrong position

    Returns (bulls: int, cows: int)
    """
    bulls = 0
    cows = 0

    for i in range(CODE_LENGTH):
        if guess[i] == secret[i]:
            bulls += 1
        elif guess[i] in secret:
            cows += 1

    return bulls, cows


def is_winner(bulls):
    """Check if the player has won (4 bulls = all digits correct)."""
    return bulls == CODE_LENGTH
