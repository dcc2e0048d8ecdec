import json
import os
import stat

import pytest

from bizboard.client import ApiError, DashboardClient, SessionExpired, SessionStore, subdomain_from_hostname

AUTH = {
    "token": "access-token",
    "refreshToken": "refresh-token",
    "user": {"id": "u1", "email": "admin@demo.com"},
    "tenant": {"id": "t1", "subdomain": "demo"},
}


class FakeResponse:
    def __init__(self, status_code, body=None, reason='OK'):
        self.status_code = status_code
        self._body = body
        self.reason = reason

    def json(self):
        if self._body is None:
            raise ValueError("No JSON")
        return self._body


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": headers, **kwargs})
        return self.responses.pop(0)


@pytest.mark.parametrize('hostname, expected', [
    ('acme.dashboard.com', 'acme'),
    ('www.dashboard.com', None),
    ('localhost', None),
    (None, None),
])
def test_subdomain_from_hostname(hostname, expected):
    assert subdomain_from_hostname(hostname) == expected


def test_login_stores_session_and_sends_token():
    session = FakeSession(
        FakeResponse(200, {"success": True, "data": AUTH}),
        FakeResponse(200, {"success": True, "data": {"totalRevenue": 120.0}}),
    )
    client = DashboardClient('http://localhost:5000/', session=session)

    client.login('admin@demo.com', 'password123', subdomain='demo')
    stats = client.stats()

    assert stats == {"totalRevenue": 120.0}
    assert client.is_authenticated
    assert client.user['email'] == 'admin@demo.com'
    assert session.calls[0]['url'] == 'http://localhost:5000/api/auth/login'
    assert session.calls[0]['json'] == {"email": "admin@demo.com", "password": "password123", "subdomain": "demo"}
    assert 'Authorization' not in session.calls[0]['headers']
    assert session.calls[1]['headers']['Authorization'] == 'Bearer access-token'


def test_tenant_header_prefers_hostname_over_stored_subdomain():
    store = SessionStore()
    store.set('tenantSubdomain', 'stored')

    hosted = DashboardClient('https://acme.dashboard.com', store=store,
                             session=FakeSession(FakeResponse(200, {"success": True, "data": {}})))
    hosted.current_tenant()
    assert hosted.session.calls[0]['headers']['X-Tenant-Subdomain'] == 'acme'

    local = DashboardClient('http://localhost:5000', store=store,
                            session=FakeSession(FakeResponse(200, {"success": True, "data": {}})))
    local.current_tenant()
    assert local.session.calls[0]['headers']['X-Tenant-Subdomain'] == 'stored'

    local.set_tenant_subdomain(None)
    assert local.tenant_subdomain is None


def test_401_clears_session():
    store = SessionStore()
    for key, value in (('authToken', 'stale'), ('user', {"id": "u1"}), ('tenant', {"id": "t1"}),
                       ('tenantSubdomain', 'demo')):
        store.set(key, value)
    client = DashboardClient('http://localhost:5000', store=store,
                             session=FakeSession(FakeResponse(401, {"success": False, "error": "Token expired"})))

    with pytest.raises(SessionExpired) as exc_info:
        client.me()

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == 'Token expired'
    assert client.token is None and client.user is None and client.tenant is None
    # Tenant choice survives a logout
    assert store.get('tenantSubdomain') == 'demo'


def test_error_envelope_raises_api_error():
    client = DashboardClient('http://localhost:5000', session=FakeSession(
        FakeResponse(409, {"success": False, "error": "User already exists in this tenant"}, reason='CONFLICT'),
        FakeResponse(502, None, reason='Bad Gateway'),
    ))

    with pytest.raises(ApiError) as exc_info:
        client.register(email='a@b.com', password='secret123')
    assert exc_info.value.status_code == 409
    assert exc_info.value.message == 'User already exists in this tenant'

    with pytest.raises(ApiError) as exc_info:
        client.health()
    assert exc_info.value.message == 'Bad Gateway'


def test_logout_clears_session_even_when_request_fails():
    store = SessionStore()
    store.set('authToken', 'token')
    client = DashboardClient('http://localhost:5000', store=store,
                             session=FakeSession(FakeResponse(500, {"success": False, "error": "Internal server error"})))

    with pytest.raises(ApiError):
        client.logout()

    assert client.token is None


def test_detailed_health_returns_503_body():
    body = {"success": False, "data": {"status": "unhealthy"}}
    client = DashboardClient('http://localhost:5000', session=FakeSession(FakeResponse(503, body)))

    assert client.health_detailed() == body


def test_recent_jobs_passes_limit():
    session = FakeSession(FakeResponse(200, {"success": True, "data": []}))
    client = DashboardClient('http://localhost:5000', session=session)

    assert client.recent_jobs(limit=5) == []
    assert session.calls[0]['params'] == {'limit': 5}


def test_session_store_persists_to_file(tmp_path):
    path = tmp_path / 'session' / 'state.json'

    store = SessionStore(str(path))
    store.set('authToken', 'abc')

    assert json.loads(path.read_text()) == {"authToken": "abc"}
    assert SessionStore(str(path)).get('authToken') == 'abc'


def test_session_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text('{not json')

    assert SessionStore(str(path)).get('authToken') is None


@pytest.mark.skipif(os.name == 'nt', reason='POSIX permission bits')
def test_session_file_is_private(tmp_path):
    path = tmp_path / 'state.json'

    SessionStore(str(path)).set('authToken', 'secret')

    assert stat.S_IMODE(path.stat().st_mode) == 0o600


@pytest.mark.skipif(os.name == 'nt', reason='POSIX permission bits')
def test_existing_session_file_is_tightened(tmp_path):
    path = tmp_path / 'state.json'
    path.write_text('{}')
    path.chmod(0o644)

    SessionStore(str(path)).set('authToken', 'secret')

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert json.loads(path.read_text()) == {"authToken": "secret"}
