# tests/test_app.py
import pytest

from app import create_app


@pytest.fixture
def client(make_bot, store):
    for i in range(3):
        store.record('42', f"message {i}", 1000 + i)
    app = create_app(make_bot())
    app.testing = True
    return app.test_client()


def test_index_is_alive(client):
    resp = client.get('/')
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Bot is running!"


def test_history_for_user(client):
    resp = client.get('/history?user_id=42')
    assert resp.status_code == 200
    assert [r['content'] for r in resp.get_json()['history']] == ['message 0', 'message 1', 'message 2']


def test_history_limit(client):
    resp = client.get('/history?user_id=42&limit=1')
    assert resp.get_json()['history'] == [{'content': 'message 2', 'timestamp': 1002}]


def test_history_unknown_or_missing_user(client):
    assert client.get('/history?user_id=7').get_json() == {'history': []}
    assert client.get('/history').get_json() == {'history': []}
