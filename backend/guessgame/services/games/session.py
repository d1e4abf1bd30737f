import enum
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from guessgame.exceptions import TransitionError, ValidationError
from guessgame.models import GameRecord, NAME_MAX_LENGTH
from .scoring import (
    Hint,
    MAX_TARGET,
    MIN_TARGET,
    Score,
    evaluate_guess,
    generate_target,
    is_new_best,
    parse_guess,
    round_elapsed,
)

READY_MESSAGE = f'Guess a number between {MIN_TARGET} and {MAX_TARGET}!'
EMPTY_STORE_MESSAGE = 'No record yet. Be the first legend!'
START_MESSAGE = f'Good luck! Enter a number between {MIN_TARGET} and {MAX_TARGET}.'
HINT_MESSAGES = {
    Hint.TOO_LOW: 'Too low! Guess higher.',
    Hint.TOO_HIGH: 'Too high! Guess lower.',
}


class Status(str, enum.Enum):
    READY = 'READY'
    PLAYING = 'PLAYING'
    WON = 'WON'


@dataclass(frozen=True)
class GuessEntry:
    value: int
    hint: Hint
    sequence: int

    def to_dict(self):
        return {'value': self.value, 'hint': self.hint.value, 'sequence': self.sequence}


def _run_inline(fn, *args):
    fn(*args)


def _ignore(event, payload):
    pass


class GameSession:
    """One player's game: READY -> PLAYING -> WON -> READY.

    Elapsed time is computed from the clock whenever it is read, so no timer
    has to run for it to stay correct. Every win writes a record and then
    re-reads the top of the leaderboard.

    ``listener`` receives ``(event, payload)`` for started, hint, won,
    leaderboard, reset and closed. ``dispatch`` runs the post-win store work
    and may hand it to a background task.
    """

    def __init__(
        self,
        store,
        leaderboard_limit: int = 10,
        clock: Callable[[], float] = time.monotonic,
        target_factory: Optional[Callable[[], int]] = None,
        dispatch: Callable = _run_inline,
        listener: Callable = _ignore,
    ):
        self.store = store
        self.leaderboard_limit = leaderboard_limit
        self._clock = clock
        self._target_factory = target_factory or generate_target
        self._dispatch = dispatch
        self._listener = listener

        self.status = Status.READY
        self.player_name = ''
        self.target: Optional[int] = None
        self.guesses: List[GuessEntry] = []
        self.message = READY_MESSAGE
        self.best: Optional[GameRecord] = None
        self.leaderboard: List[GameRecord] = []
        self.new_best = False
        self._start_time: Optional[float] = None
        self._final_time: Optional[float] = None

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def elapsed_time(self) -> float:
        if self.status == Status.WON:
            return self._final_time or 0.0
        if self.status == Status.PLAYING and self._start_time is not None:
            return max(0.0, self._clock() - self._start_time)
        return 0.0

    def history(self) -> List[GuessEntry]:
        """Guesses, most recent first."""
        return list(reversed(self.guesses))

    def start_game(self, player_name: str) -> None:
        if self.status != Status.READY:
            raise TransitionError(f'cannot start a game while {self.status.value}')
        name = (player_name or '').strip()
        if not name:
            raise ValidationError('empty name')
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f'name longer than {NAME_MAX_LENGTH} characters')

        self.player_name = name
        self.target = self._target_factory()
        self.guesses = []
        self.new_best = False
        self._final_time = None
        self._start_time = self._clock()
        self.status = Status.PLAYING
        self.message = START_MESSAGE
        self._listener('started', {'player_name': name})

    def submit_guess(self, raw) -> GuessEntry:
        if self.status != Status.PLAYING:
            raise TransitionError(f'not accepting guesses while {self.status.value}')
        value = parse_guess(raw)

        hint = evaluate_guess(value, self.target)
        entry = GuessEntry(value=value, hint=hint, sequence=len(self.guesses) + 1)
        self.guesses.append(entry)
        if hint == Hint.CORRECT:
            self._win()
        else:
            self.message = HINT_MESSAGES[hint]
            self._listener('hint', entry.to_dict())
        return entry

    def _win(self) -> None:
        self._final_time = round_elapsed(self._clock() - self._start_time)
        self.status = Status.WON
        self.message = f'Correct! The number was {self.target}.'
        self.new_best = is_new_best(Score(self.attempts, self._final_time), self.best)
        record = GameRecord(name=self.player_name, attempts=self.attempts, time_seconds=self._final_time)
        self._listener('won', {
            'target': self.target,
            'attempts': self.attempts,
            'time_seconds': self._final_time,
            'new_best': self.new_best,
        })
        self._dispatch(self._save_and_refresh, record)

    def _save_and_refresh(self, record: GameRecord) -> None:
        # judged against the store; the cached best can be stale
        self.new_best = is_new_best(record, self.store.fetch_best())
        self.store.insert(record)
        self.refresh_ranking()
        self._listener('leaderboard', dict(self.ranking_dict(), new_best=self.new_best))

    def refresh_ranking(self) -> None:
        if self.leaderboard_limit > 0:
            self.leaderboard = list(self.store.fetch_top(self.leaderboard_limit))
            self.best = self.leaderboard[0] if self.leaderboard else None
        else:
            self.leaderboard = []
            self.best = self.store.fetch_best()

    def reset_game(self) -> None:
        if self.status == Status.PLAYING:
            raise TransitionError('cannot reset while a game is being played')
        self.status = Status.READY
        self.player_name = ''
        self.target = None
        self.guesses = []
        self.new_best = False
        self._start_time = None
        self._final_time = None
        self.refresh_ranking()
        self.message = READY_MESSAGE if self.best else EMPTY_STORE_MESSAGE
        self._listener('reset', {})

    def close(self) -> None:
        self._listener('closed', {})

    def ranking_dict(self):
        return {
            'best': self.best.to_dict() if self.best else None,
            'leaderboard': [r.to_dict() for r in self.leaderboard],
        }

    def to_dict(self):
        payload = {
            'status': self.status.value,
            'player_name': self.player_name,
            'message': self.message,
            'attempts': self.attempts,
            'elapsed_time': round_elapsed(self.elapsed_time),
            'guesses': [g.to_dict() for g in self.history()],
            'target': self.target if self.status == Status.WON else None,
            'new_best': self.new_best,
        }
        payload.update(self.ranking_dict())
        return payload
