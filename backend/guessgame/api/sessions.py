from flask import Blueprint, jsonify, request, current_app
from guessgame.exceptions import TransitionError, ValidationError
from guessgame.services.games.registry import create_session, drop_session, get_session


sessions = Blueprint('sessions', __name__)


def _session_or_404(session_id):
    session = get_session(session_id)
    if session is None:
        return None, (jsonify({'error': 'Session not found'}), 404)
    return session, None


def _state(session_id, session, **extra):
    payload = session.to_dict()
    payload['session_id'] = session_id
    payload.update(extra)
    return payload


@sessions.route('', methods=['POST'])
def open_session():
    session_id, session = create_session(current_app._get_current_object())
    return jsonify(_state(session_id, session)), 201


@sessions.route('/<string:session_id>', methods=['GET'])
def get_state(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error
    return jsonify(_state(session_id, session))


@sessions.route('/<string:session_id>/start', methods=['POST'])
def start_game(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error
    data = request.get_json(silent=True) or {}
    try:
        session.start_game(data.get('name') or '')
    except ValidationError as exc:
        return jsonify({'error': exc.message}), 400
    except TransitionError as exc:
        return jsonify({'error': exc.message}), 409
    return jsonify(_state(session_id, session))


@sessions.route('/<string:session_id>/guess', methods=['POST'])
def submit_guess(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error
    data = request.get_json(silent=True) or {}
    try:
        entry = session.submit_guess(data.get('guess'))
    except ValidationError as exc:
        return jsonify({'error': exc.message}), 400
    except TransitionError as exc:
        return jsonify({'error': exc.message}), 409
    return jsonify(_state(session_id, session, last_guess=entry.to_dict()))


@sessions.route('/<string:session_id>/reset', methods=['POST'])
def reset_game(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error
    try:
        session.reset_game()
    except TransitionError as exc:
        return jsonify({'error': exc.message}), 409
    return jsonify(_state(session_id, session))


@sessions.route('/<string:session_id>', methods=['DELETE'])
def close_session(session_id):
    if not drop_session(session_id):
        return jsonify({'error': 'Session not found'}), 404
    return jsonify({'message': 'Session closed'})
