import pytest

from app import SESSION_KEY, create_app


@pytest.fixture
def app():
    app = create_app({'TESTING': True, 'SECRET_KEY': 'test-key', 'GAME_SEED': 1234})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def started(client):
    """A client with a game in its session; returns (client, secret)."""
    client.post('/start')
    with client.session_transaction() as sess:
        secret = sess[SESSION_KEY]['secret']
    return client, secret
