# app.py
import logging
import threading

from flask import Flask, request, jsonify

log = logging.getLogger(__name__)


def create_app(chatbot):
    app = Flask(__name__)

    @app.route('/')
    def index():
        return "Bot is running!", 200, {'Content-Type': 'text/plain'}

    @app.route('/history', methods=['GET'])
    def history():
        user_id = request.args.get('user_id')
        limit = request.args.get('limit', default=200, type=int)
        hist = chatbot.get_history(user_id, limit=limit)
        return jsonify({'history': list(hist)})

    return app


def start_status_server(app, port):
    # werkzeug dev server in a daemon thread next to the gateway connection
    thread = threading.Thread(
        target=app.run,
        kwargs={'host': '0.0.0.0', 'port': port, 'debug': False, 'use_reloader': False},
        daemon=True,
    )
    thread.start()
    log.info("Status server listening on port %d", port)
    return thread
