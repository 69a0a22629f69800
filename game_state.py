"""
game_state.py - Game state and transitions for Cows and Bulls.

A GameState is never mutated. Every transition (new_game, apply_guess,
replay) returns a new state, which keeps the rules testable without a
browser or a Flask session. The state round-trips through plain dicts so it
can live in the session cookie.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple

from game_logic import (
    MAX_ATTEMPTS,
    InvalidGuess,
    calculate_bulls_and_cows,
    check_guess,
    generate_secret,
    is_winner,
)

# Outcome kinds of the last submission
NONE = 'none'
SUCCESS = 'success'
FAIL = 'fail'
INVALID = 'invalid'
OUTCOMES = (NONE, SUCCESS, FAIL, INVALID)

# Derived game status
IN_PROGRESS = 'in_progress'
WON = 'won'
LOST = 'lost'

WIN_MESSAGE = 'Congratulations! You guessed the number! 🎉'
LOSS_MESSAGE = 'Game over! The number was {secret}.'
SCORE_MESSAGE = '{bulls} bulls, {cows} cows'


@dataclass(frozen=True)
class GuessRecord:
    guess: str
    bulls: int
    cows: int

    def to_dict(self):
        return {'guess': self.guess, 'bulls': self.bulls, 'cows': self.cows}


@dataclass(frozen=True)
class GameState:
    """Snapshot of one round: the secret, scored guesses and last feedback."""
    secret: str
    pending_guess: str = ''
    history: Tuple[GuessRecord, ...] = field(default_factory=tuple)
    attempts: int = 0
    is_over: bool = False
    outcome: str = NONE
    message: str = ''

    @property
    def status(self):
        if not self.is_over:
            return IN_PROGRESS
        if self.history and is_winner(self.history[-1].bulls):
            return WON
        return LOST

    @property
    def remaining_attempts(self):
        return max(0, MAX_ATTEMPTS - self.attempts)

    def to_dict(self):
        """Full state, secret included, for the session."""
        return {
            'secret': self.secret,
            'pending_guess': self.pending_guess,
            'history': [h.to_dict() for h in self.history],
            'attempts': self.attempts,
            'is_over': self.is_over,
            'outcome': self.outcome,
            'message': self.message,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Rebuild a state from to_dict() output.
        Raises ValueError if the data does not describe a consistent game.
        """
        try:
            history = tuple(
                GuessRecord(str(h['guess']), int(h['bulls']), int(h['cows']))
                for h in data['history']
            )
            state = cls(
                secret=str(data['secret']),
                pending_guess=str(data.get('pending_guess', '')),
                history=history,
                attempts=int(data['attempts']),
                is_over=bool(data['is_over']),
                outcome=str(data.get('outcome', NONE)),
                message=str(data.get('message', '')),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f'Malformed game state: {exc!r}') from exc

        if state.attempts != len(state.history) or state.attempts > MAX_ATTEMPTS:
            raise ValueError('Attempt count does not match guess history.')
        if state.outcome not in OUTCOMES:
            raise ValueError(f'Unknown outcome {state.outcome!r}.')
        return state

    def public_view(self):
        """What the browser may see: the secret stays hidden until the game ends."""
        view = self.to_dict()
        del view['secret']
        view['status'] = self.status
        view['max_attempts'] = MAX_ATTEMPTS
        view['remaining_attempts'] = self.remaining_attempts
        if self.is_over:
            view['secret'] = self.secret
        return view


def new_game(rng=None):
    """Start a round: fresh secret, empty history."""
    return GameState(secret=generate_secret(rng))


def apply_guess(state, guess):
    """
    Score a guess and return the next state.

    - Finished games ignore the guess and return the same state object.
    - Malformed guesses only change the feedback; no attempt is used.
    - A 4-bull guess wins at once; the 10th miss loses and reveals the secret.
    """
    if state.is_over:
        return state

    try:
        check_guess(guess)
    except InvalidGuess as exc:
        return replace(state, pending_guess=guess if isinstance(guess, str) else '',
                       outcome=INVALID, message=str(exc))

    bulls, cows = calculate_bulls_and_cows(state.secret, guess)
    history = state.history + (GuessRecord(guess, bulls, cows),)
    attempts = state.attempts + 1

    if is_winner(bulls):
        return replace(state, pending_guess='', history=history, attempts=attempts,
                       is_over=True, outcome=SUCCESS, message=WIN_MESSAGE)

    if attempts >= MAX_ATTEMPTS:
        return replace(state, pending_guess='', history=history, attempts=attempts,
                       is_over=True, outcome=FAIL,
                       message=LOSS_MESSAGE.format(secret=state.secret))

    return replace(state, pending_guess='', history=history, attempts=attempts,
                   outcome=FAIL, message=SCORE_MESSAGE.format(bulls=bulls, cows=cows))


def replay(state, rng=None):
    """Throw the current round away, whatever its status, and start a new one."""
    return new_game(rng)


def submit_guess(state, guess, notifier):
    """apply_guess, then hand the outcome to the notifier. Ignored guesses stay silent."""
    next_state = apply_guess(state, guess)
    if next_state is not state:
        notifier.play(next_state.outcome)
    return next_state


def restart(state, rng, notifier):
    """replay without a sound; the notifier is told there is no outcome yet."""
    next_state = replay(state, rng)
    notifier.play(next_state.outcome)
    return next_state
