"""Record store backed by the game_records table.

Reads degrade to None/[] and writes are dropped when the database is
unreachable; callers never see an exception from here.
"""
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from guessgame import db
from guessgame.exceptions import StoreError
from guessgame.models import GameRecord


def _ranked():
    return GameRecord.query.order_by(
        GameRecord.attempts.asc(),
        GameRecord.time_seconds.asc(),
        GameRecord.id.asc(),
    )


def _log_warning(message: str) -> None:
    try:
        current_app.logger.warning(message)
    except Exception:
        pass


class RecordStore:

    def _read(self, query_fn):
        try:
            return query_fn()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(str(exc))

    def fetch_best(self) -> Optional[GameRecord]:
        try:
            return self._read(lambda: _ranked().first())
        except StoreError as exc:
            _log_warning(f"[store-read-failed] op=fetch_best error={exc.message}")
            return None

    def fetch_top(self, limit: int) -> List[GameRecord]:
        if limit is None or limit <= 0:
            return []
        try:
            return self._read(lambda: _ranked().limit(limit).all())
        except StoreError as exc:
            _log_warning(f"[store-read-failed] op=fetch_top limit={limit} error={exc.message}")
            return []

    def _write(self, record: GameRecord) -> None:
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise StoreError(str(exc))

    def insert(self, record: GameRecord) -> Optional[GameRecord]:
        try:
            self._write(record)
        except StoreError as exc:
            _log_warning(
                f"[store-write-failed] name={record.name!r} attempts={record.attempts} error={exc.message}"
            )
            return None
        try:
            current_app.logger.info(
                f"[record-saved] id={record.id} name={record.name!r} attempts={record.attempts} time={record.time_seconds}"
            )
        except Exception:
            pass
        return record
