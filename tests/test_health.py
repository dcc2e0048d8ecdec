from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.exc import OperationalError

from bizboard.extensions import db
from tests.conftest import StubRedis


def test_basic_health(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['status'] == 'healthy'
    assert body['data']['version'] == '1.0.0'
    assert body['data']['uptime'] >= 0
    assert body['data']['timestamp']


def test_detailed_health_all_up(client, app):
    response = client.get('/api/health/detailed')

    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['status'] == 'healthy'
    assert body['data']['checks']['database'] == {"status": "healthy"}
    assert body['data']['checks']['redis'] == {"status": "healthy"}
    assert 'status' not in body['data']['checks']['memory']
    assert app.extensions['redis'].pings == 1


def test_detailed_health_redis_down(client, app):
    app.extensions['redis'] = StubRedis(error=RedisConnectionError('Connection refused'))

    response = client.get('/api/health/detailed')

    assert response.status_code == 503
    body = response.get_json()
    assert body['success'] is False
    assert body['data']['status'] == 'unhealthy'
    assert body['data']['checks']['redis'] == {"status": "unhealthy", "error": "Connection refused"}
    assert body['data']['checks']['database']['status'] == 'healthy'


def test_detailed_health_database_down(client, monkeypatch):
    def broken_execute(*args, **kwargs):
        raise OperationalError('SELECT 1', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'execute', broken_execute)

    response = client.get('/api/health/detailed')

    assert response.status_code == 503
    checks = response.get_json()['data']['checks']
    assert checks['database']['status'] == 'unhealthy'
    assert 'database is locked' in checks['database']['error']
    assert checks['redis']['status'] == 'healthy'
