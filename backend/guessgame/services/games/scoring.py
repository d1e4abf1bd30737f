import enum
import random
from typing import NamedTuple, Optional, Tuple

from guessgame.exceptions import ValidationError

MIN_TARGET = 1
MAX_TARGET = 100
# Elapsed time is stored in hundredths of a second
ELAPSED_PRECISION = 2


class Hint(str, enum.Enum):
    TOO_LOW = 'TOO_LOW'
    TOO_HIGH = 'TOO_HIGH'
    CORRECT = 'CORRECT'


class Score(NamedTuple):
    attempts: int
    time_seconds: float


def generate_target(rng: Optional[random.Random] = None) -> int:
    """Pick the hidden number, uniformly in [MIN_TARGET, MAX_TARGET]."""
    return (rng or random).randint(MIN_TARGET, MAX_TARGET)


def evaluate_guess(guess: int, target: int) -> Hint:
    """Compare a guess with the target.

    TOO_LOW means the player has to guess higher next time.
    """
    if guess == target:
        return Hint.CORRECT
    return Hint.TOO_LOW if guess < target else Hint.TOO_HIGH


def rank_key(record) -> Tuple[int, float]:
    return (record.attempts, record.time_seconds)


def is_new_best(candidate, current_best) -> bool:
    """Fewer attempts wins; on equal attempts the faster time wins.

    A tie on both is not a new best.
    """
    if current_best is None:
        return True
    return rank_key(candidate) < rank_key(current_best)


def round_elapsed(seconds: float) -> float:
    return round(max(0.0, seconds), ELAPSED_PRECISION)


def parse_guess(raw) -> int:
    """Turn raw player input into a guess in [MIN_TARGET, MAX_TARGET]."""
    if isinstance(raw, bool):
        raise ValidationError('out of range or not a number')
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError):
            raise ValidationError('out of range or not a number')
    if value < MIN_TARGET or value > MAX_TARGET:
        raise ValidationError('out of range or not a number')
    return value
