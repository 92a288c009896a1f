from flask import Blueprint, jsonify
from codewords import session_gateway

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Codewords game server!'})


@main.route('/health')
def health():
    return jsonify({'ok': True, 'connections': session_gateway.members.stats()})
