"""Live game sessions, one per client, kept in memory.

Also wires each session's side effects to Socket.IO: room pushes, the
elapsed-time ticker, and background persistence after a win.
"""
import uuid
from typing import Dict, Optional, Tuple

from guessgame import socketio
from guessgame.services.records import RecordStore
from .session import GameSession
from .ticker import start_ticker, stop_ticker


_sessions: Dict[str, GameSession] = {}


def room_for(session_id: str) -> str:
    return f"session:{session_id}"


def _make_dispatch(app):
    def dispatch(fn, *args):
        def _runner():
            with app.app_context():
                fn(*args)

        if app.config.get('TESTING'):
            _runner()
        else:
            socketio.start_background_task(_runner)
    return dispatch


def _make_listener(app, session_id: str):
    room = room_for(session_id)

    def listener(event: str, payload: dict) -> None:
        session = _sessions.get(session_id)
        if event == 'started':
            app.logger.info(f"[session-start] session={session_id} player={payload.get('player_name')!r}")
            if session is not None:
                start_ticker(app, session_id, session)
        elif event in ('won', 'reset', 'closed'):
            stop_ticker(session_id)

        if event == 'won':
            app.logger.info(
                f"[session-won] session={session_id} attempts={payload['attempts']} time={payload['time_seconds']}s new_best={payload['new_best']}"
            )
            socketio.emit('celebrate', dict(payload, session_id=session_id), to=room, namespace='/ws')
        elif event == 'leaderboard':
            socketio.emit('leaderboard_update', dict(payload, session_id=session_id), to=room, namespace='/ws')
            return
        elif event == 'closed':
            return
        socketio.emit('state_update', {'session_id': session_id}, to=room, namespace='/ws')

    return listener


def create_session(app) -> Tuple[str, GameSession]:
    session_id = uuid.uuid4().hex
    session = GameSession(
        RecordStore(),
        leaderboard_limit=int(app.config.get('LEADERBOARD_LIMIT', 10)),
        dispatch=_make_dispatch(app),
        listener=_make_listener(app, session_id),
    )
    _sessions[session_id] = session
    session.refresh_ranking()
    return session_id, session


def get_session(session_id: str) -> Optional[GameSession]:
    return _sessions.get(session_id)


def drop_session(session_id: str) -> bool:
    session = _sessions.pop(session_id, None)
    if session is None:
        return False
    session.close()
    return True


def clear_sessions() -> None:
    for session_id in list(_sessions):
        drop_session(session_id)
