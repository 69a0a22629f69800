"""
app.py - Flask application for Cows and Bulls (single player)
"""

import logging
import os

from flask import Flask, current_app, jsonify, render_template, request, session
from werkzeug.exceptions import HTTPException

from game_logic import MAX_ATTEMPTS, make_random_source
from game_state import INVALID, LOST, WON, GameState, restart, submit_guess
from notifier import DEFAULT_SOUND_URLS, DEFAULT_VOLUME, SoundCueNotifier

SESSION_KEY = 'game'


# ─────────────────────────────────────────────
# CONFIGURATION
# ─────────────────────────────────────────────

def load_config(overrides=None):
    """Defaults, then environment variables, then explicit overrides."""
    config = {
        'SECRET_KEY': os.environ.get('SECRET_KEY', 'cows-and-bulls-secret-2024'),
        'GAME_SEED': os.environ.get('GAME_SEED') or None,
        'SOUND_VOLUME': float(os.environ.get('SOUND_VOLUME', DEFAULT_VOLUME)),
        'SOUND_URLS': dict(DEFAULT_SOUND_URLS),
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'INFO'),
    }
    config.update(overrides or {})

    if config['GAME_SEED'] is not None:
        try:
            config['GAME_SEED'] = int(config['GAME_SEED'])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"GAME_SEED must be an integer, got {config['GAME_SEED']!r}.") from exc
    return config


def create_app(config=None, **flask_kwargs):
    """Build the Flask app. flask_kwargs are passed to Flask() (template/static folders)."""
    app = Flask(__name__, **flask_kwargs)
    app.config.update(load_config(config))
    app.secret_key = app.config['SECRET_KEY']
    app.logger.setLevel(getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))

    # Fail at startup on a bad volume rather than on the first guess
    SoundCueNotifier(app.config['SOUND_URLS'], app.config['SOUND_VOLUME'])

    app.extensions['cows_and_bulls_rng'] = make_random_source(app.config['GAME_SEED'])

    register_routes(app)
    return app


# ─────────────────────────────────────────────
# HELPER UTILITIES
# ─────────────────────────────────────────────

def error_response(message, status=400, **extra):
    payload = {'success': False, 'error': message}
    payload.update(extra)
    return jsonify(payload), status


def random_source():
    return current_app.extensions['cows_and_bulls_rng']


def make_notifier():
    return SoundCueNotifier(current_app.config['SOUND_URLS'], current_app.config['SOUND_VOLUME'])


def load_game():
    """Return the session's GameState, or None. Unreadable session data is dropped."""
    data = session.get(SESSION_KEY)
    if data is None:
        return None
    try:
        return GameState.from_dict(data)
    except ValueError as exc:
        current_app.logger.warning('Discarding unreadable game session: %s', exc)
        session.pop(SESSION_KEY, None)
        return None


def save_game(state):
    session[SESSION_KEY] = state.to_dict()


def start_game(previous=None):
    """New round in the session (also used for replay)."""
    notifier = make_notifier()
    state = restart(previous, random_source(), notifier)
    save_game(state)
    current_app.logger.info('New game started')
    current_app.logger.debug('Secret for new game: %s', state.secret)
    return state


def state_response(state, sound=None):
    return jsonify({'success': True, 'state': state.public_view(), 'sound': sound})


# ─────────────────────────────────────────────
# ROUTES
# ─────────────────────────────────────────────

def register_routes(app):

    @app.route('/')
    def index():
        """Game screen; starts a round if the session has none."""
        state = load_game() or start_game()
        return render_template('index.html', state=state.public_view(), max_attempts=MAX_ATTEMPTS)

    @app.route('/start', methods=['POST'])
    def start():
        """Start a fresh round, discarding any game in progress."""
        return state_response(start_game(load_game()))

    @app.route('/guess', methods=['POST'])
    def guess():
        """
        Player submits a guess against the secret.
        Expects JSON: { "guess": "1234" }
        Returns the updated state and the sound cue to play.
        """
        state = load_game()
        if state is None:
            return error_response('No active game. Please start a new game.', 403)

        if state.is_over:
            return error_response('Game is already over.', 409, state=state.public_view())

        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            return error_response('No data provided.')

        guess_text = str(data.get('guess', '')).strip()
        notifier = make_notifier()
        state = submit_guess(state, guess_text, notifier)
        save_game(state)

        if state.outcome == INVALID:
            current_app.logger.debug('Rejected guess %r: %s', guess_text, state.message)
            return error_response(state.message, 400, state=state.public_view(), sound=notifier.cue)

        record = state.history[-1]
        current_app.logger.debug('Guess %s scored %d bulls, %d cows', record.guess, record.bulls, record.cows)
        if state.status == WON:
            current_app.logger.info('Game won in %d attempts', state.attempts)
        elif state.status == LOST:
            current_app.logger.info('Game lost after %d attempts', state.attempts)

        return state_response(state, sound=notifier.cue)

    @app.route('/replay', methods=['POST'])
    def replay():
        """Play again: new secret, cleared history, from any state."""
        return state_response(start_game(load_game()))

    @app.route('/result', methods=['GET'])
    def result():
        """Return current game state summary."""
        state = load_game()
        if state is None:
            return error_response('No active game.', 403)
        return state_response(state)

    @app.route('/favicon.ico')
    def favicon():
        return '', 204

    @app.errorhandler(HTTPException)
    def http_error(exc):
        return error_response(exc.description, exc.code)


app = create_app()


# ─────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────

if __name__ == '__main__':
    app.run(debug=True, port=5000)
