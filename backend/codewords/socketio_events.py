from flask import request
from flask_socketio import emit
from codewords import socketio, session_gateway


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect(*args):
    # A dropped connection keeps the player's seat; they rejoin with the same player_id
    session_gateway.handle_disconnect(_get_sid())


def handle_join_game(data):
    session_gateway.handle_join(_get_sid(), data)


def handle_leave_game(data=None):
    session_gateway.handle_leave(_get_sid())


def handle_update_settings(data):
    session_gateway.handle_update_settings(_get_sid(), data)


def handle_select_team(data):
    session_gateway.handle_select_team(_get_sid(), data)


def handle_start_game(data=None):
    session_gateway.handle_start_game(_get_sid())


def handle_give_clue(data):
    session_gateway.handle_give_clue(_get_sid(), data)


def handle_guess_word(data):
    session_gateway.handle_guess_word(_get_sid(), data)


def handle_end_turn(data=None):
    session_gateway.handle_end_turn(_get_sid())


def handle_regenerate_board(data=None):
    session_gateway.handle_regenerate_board(_get_sid())


def handle_ping(data=None):
    emit('pong', {'ok': True})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    session_gateway.namespace = namespace
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join_game', handle_join_game, namespace=namespace)
    socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
    socketio.on_event('update_settings', handle_update_settings, namespace=namespace)
    socketio.on_event('select_team', handle_select_team, namespace=namespace)
    socketio.on_event('start_game', handle_start_game, namespace=namespace)
    socketio.on_event('give_clue', handle_give_clue, namespace=namespace)
    socketio.on_event('guess_word', handle_guess_word, namespace=namespace)
    socketio.on_event('end_turn', handle_end_turn, namespace=namespace)
    socketio.on_event('regenerate_board', handle_regenerate_board, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
