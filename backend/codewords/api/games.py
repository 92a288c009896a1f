from flask import Blueprint, jsonify, request
from codewords import session_gateway
from codewords.game.errors import GameError


games = Blueprint('games', __name__)


@games.errorhandler(GameError)
def handle_game_error(exc):
    return jsonify({'error': exc.message, 'kind': exc.kind}), exc.http_status


@games.route('/create', methods=['POST'])
def create_game():
    """
    Creates a new game lobby. The returned host_id is the player id the
    creator should join with.
    """
    data = request.get_json(silent=True) or {}
    session = session_gateway.create_game(settings=data.get('settings'), host_id=data.get('host_id'))
    return jsonify({
        'message': 'New game created!',
        'game_code': session.code,
        'host_id': session.host_id,
        'settings': session.settings.to_dict(),
    }), 201


@games.route('/<string:game_code>/state', methods=['GET'])
def get_game_state(game_code):
    """
    Returns the public view of a game: revealed cards only, never the key card.
    """
    return jsonify(session_gateway.public_state(game_code))
