from typing import Dict
from flask import request
from flask_socketio import join_room, leave_room, emit
from guessgame import socketio
from guessgame.services.games.registry import drop_session, get_session, room_for


# socket sid -> joined session id, and live socket count per session
_sid_to_session: Dict[str, str] = {}
_socket_count: Dict[str, int] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _forget_socket(sid: str):
    session_id = _sid_to_session.pop(sid, None)
    if session_id is None:
        return None
    remaining = max(0, _socket_count.get(session_id, 0) - 1)
    if remaining:
        _socket_count[session_id] = remaining
    else:
        _socket_count.pop(session_id, None)
    return session_id


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(reason=None):
    # The last socket of a session going away tears the session down
    session_id = _forget_socket(_get_sid())
    if session_id and _socket_count.get(session_id, 0) == 0:
        drop_session(session_id)


def handle_join_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    if get_session(session_id) is None:
        emit('error', {'message': 'Session not found'})
        return
    sid = _get_sid()
    if _sid_to_session.get(sid) != session_id:
        _forget_socket(sid)
        _sid_to_session[sid] = session_id
        _socket_count[session_id] = _socket_count.get(session_id, 0) + 1
    room = room_for(session_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = room_for(session_id)
    leave_room(room)
    if _sid_to_session.get(_get_sid()) == session_id:
        _forget_socket(_get_sid())
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('disconnect', handle_disconnect, namespace='/ws')
    socketio.on_event('join_session', handle_join_session, namespace='/ws')
    socketio.on_event('leave_session', handle_leave_session, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('disconnect', handle_disconnect, namespace='/')
        socketio.on_event('join_session', handle_join_session, namespace='/')
        socketio.on_event('leave_session', handle_leave_session, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
