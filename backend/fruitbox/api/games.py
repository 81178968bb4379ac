from flask import Blueprint, jsonify, request, current_app
from fruitbox import get_game_state, socketio
from fruitbox.services.games import InvalidArgumentError, InvalidStateError
from fruitbox.services.games.scheduler import schedule_round_timer as svc_schedule_round_timer
from fruitbox.socketio_events import SESSION_ROOM, broadcast_leaderboard


games = Blueprint('games', __name__)


@games.errorhandler(InvalidArgumentError)
def handle_invalid_argument(exc):
    return jsonify({'error': str(exc)}), 400


@games.errorhandler(InvalidStateError)
def handle_invalid_state(exc):
    return jsonify({'error': str(exc)}), 409


@games.route('/rounds', methods=['POST'])
def start_round():
    state = get_game_state()
    grid = state.init_round()
    payload = state.round_payload(grid)
    current_app.logger.info(f"[round] started round={payload['round']} players={len(state.players)}")

    socketio.emit('round_started', payload, to=SESSION_ROOM, namespace='/ws')
    svc_schedule_round_timer(current_app._get_current_object(), payload['round'])
    return jsonify(payload), 201


@games.route('/players', methods=['POST'])
def join_session():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    name = data.get('name')
    if not name:
        return jsonify({'error': 'Player name is required'}), 400

    state = get_game_state()
    created = not state.has_player(name)
    player = state.get_or_add_player(name)
    if created:
        current_app.logger.info(f"[join] player={name!r} round={state.current_round}")
    return jsonify(player.to_dict()), 201 if created else 200


@games.route('/players/<string:name>', methods=['GET'])
def get_player(name):
    player = get_game_state().get_player(name)
    if player is None:
        return jsonify({'error': 'Player not found'}), 404
    return jsonify(player.to_dict())


@games.route('/players/<string:name>/scores', methods=['POST'])
def record_score(name):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    if 'delta' not in data:
        return jsonify({'error': 'delta is required'}), 400

    state = get_game_state()
    player = state.update_player_score(name, data['delta'])
    current_app.logger.info(f"[score] player={name!r} delta={data['delta']} total={player.current_total}")

    broadcast_leaderboard(state)
    return jsonify(player.to_dict())


@games.route('/scores/current', methods=['GET'])
def current_round_scores():
    return jsonify(get_game_state().serialize_current_round_scores())


@games.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    state = get_game_state()
    limit = request.args.get('limit', type=int)
    if limit is not None and limit < 1:
        return jsonify({'error': 'limit must be positive'}), 400
    return jsonify({
        'round': state.current_round,
        'leaderboard': [{'name': n, 'score': s} for n, s in state.leaderboard(limit)],
        'top_scores': [{'name': n, 'score': s} for s, n in state.top_scores()],
    })


@games.route('/state', methods=['GET'])
def get_session_state():
    payload = get_game_state().to_dict()
    payload['round_duration'] = int(current_app.config.get('ROUND_DURATION_SEC', 120))
    return jsonify(payload)
