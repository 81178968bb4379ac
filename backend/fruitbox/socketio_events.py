from flask_socketio import join_room, leave_room, emit
from flask import current_app
from fruitbox import get_game_state, socketio
from fruitbox.services.games import GameStateError

SESSION_ROOM = 'session'


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _top_scores(state):
    return [[score, name] for score, name in state.top_scores()]


def handle_connect():
    # New sockets see the session's best scores before joining
    emit('connected', {'message': 'Connected to /ws', 'top_scores': _top_scores(get_game_state())})


def handle_join_session(data=None):
    join_room(SESSION_ROOM)
    state = get_game_state()
    emit('joined', {'room': SESSION_ROOM, 'state': state.to_dict(), 'top_scores': _top_scores(state)})


def handle_leave_session(data=None):
    leave_room(SESSION_ROOM)
    emit('left', {'room': SESSION_ROOM})


def handle_score(data):
    """Record a score delta sent by a client and broadcast the new totals."""
    name = _payload(data).get('name')
    delta = _payload(data).get('delta')
    if not name or delta is None:
        emit('error', {'message': 'name and delta are required'})
        return
    state = get_game_state()
    try:
        player = state.update_player_score(name, delta)
    except GameStateError as exc:
        emit('error', {'message': str(exc)})
        return
    current_app.logger.info(f"[score] player={name!r} delta={delta} total={player.current_total} via=ws")
    broadcast_leaderboard(state)


def broadcast_leaderboard(state) -> None:
    socketio.emit('leaderboard_update', {
        'round': state.current_round,
        'scores': state.current_totals(),
    }, to=SESSION_ROOM, namespace='/ws')


def handle_chat(data):
    """Relay a chat line from a known player to everyone in the session."""
    name = _payload(data).get('name')
    message = _payload(data).get('message')
    if not isinstance(message, str) or not message.strip():
        emit('error', {'message': 'name and message are required'})
        return
    try:
        known = get_game_state().has_player(name)
    except GameStateError as exc:
        emit('error', {'message': str(exc)})
        return
    if not known:
        emit('error', {'message': f'Unknown player {name!r}'})
        return
    current_app.logger.info(f"[chat] player={name!r} length={len(message)}")
    socketio.emit('chat_message', {'name': name, 'message': message}, to=SESSION_ROOM, namespace='/ws')


def handle_ping(data):
    emit('pong', _payload(data))


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_session', handle_join_session, namespace=namespace)
        socketio.on_event('leave_session', handle_leave_session, namespace=namespace)
        socketio.on_event('score', handle_score, namespace=namespace)
        socketio.on_event('chat', handle_chat, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
