from flask import Blueprint, jsonify, request, current_app
from guessgame.services.records import RecordStore


records = Blueprint('records', __name__)


@records.route('/best', methods=['GET'])
def best_record():
    best = RecordStore().fetch_best()
    return jsonify({'best': best.to_dict() if best else None})


@records.route('/top', methods=['GET'])
def top_records():
    cfg = current_app.config
    default_limit = int(cfg.get('LEADERBOARD_LIMIT', 10))
    max_limit = int(cfg.get('LEADERBOARD_MAX_LIMIT', 50))
    limit = request.args.get('limit', default_limit, type=int)
    limit = min(max(1, limit), max_limit)
    top = RecordStore().fetch_top(limit)
    return jsonify({'limit': limit, 'leaderboard': [r.to_dict() for r in top]})
