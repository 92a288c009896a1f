import os

from codewords import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Socket.IO's own server so the websocket transport works in dev
    socketio.run(
        app,
        host=os.environ.get('HOST', '127.0.0.1'),
        port=int(os.environ.get('PORT', 5000)),
        debug=os.environ.get('FLASK_DEBUG', '1') == '1',
        allow_unsafe_werkzeug=True,
    )
