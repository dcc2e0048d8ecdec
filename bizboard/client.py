"""
Python client for the dashboard API.

Keeps the same session state the web dashboard keeps in browser storage
(auth token, user, tenant, tenant subdomain) and attaches it to every
request:

    client = DashboardClient("https://demo.dashboard.example.com",
                             store=SessionStore("~/.bizboard/session.json"))
    client.login("admin@demo.com", "password123")
    client.stats()
"""
import json
import logging
import os
from typing import Optional, Dict, Any
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

TOKEN_KEY = 'authToken'
USER_KEY = 'user'
TENANT_KEY = 'tenant'
SUBDOMAIN_KEY = 'tenantSubdomain'
SESSION_FILE_MODE = 0o600


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class SessionExpired(ApiError):
    """401 from the API; the stored session has been cleared."""


class SessionStore:
    """
    Small key/value store for session state.

    Backed by a JSON file when a path is given, in-memory otherwise.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = os.path.expanduser(path) if path else None
        self._data: Dict[str, Any] = {}
        if self.path and os.path.exists(self.path):
            try:
                with open(self.path, 'r', encoding='utf-8') as fh:
                    self._data = json.load(fh)
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Discarding unreadable session file %s: %s", self.path, exc)
                self._data = {}

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        self._data[key] = value
        self._save()

    def remove(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)
        self._save()

    def _save(self) -> None:
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        # Holds a bearer token: owner read/write only
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SESSION_FILE_MODE)
        with os.fdopen(fd, 'w', encoding='utf-8') as fh:
            json.dump(self._data, fh)
        # os.open only applies the mode when it creates the file
        os.chmod(self.path, SESSION_FILE_MODE)


def subdomain_from_hostname(hostname: Optional[str]) -> Optional[str]:
    """First label of the host name unless it is 'localhost' or 'www'."""
    if not hostname:
        return None
    subdomain = hostname.split('.')[0]
    if subdomain and subdomain not in ('localhost', 'www'):
        return subdomain
    return None


class DashboardClient:
    """API client that carries tenant and session state between calls."""

    def __init__(self, base_url: str, store: Optional[SessionStore] = None,
                 session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip('/')
        self.store = store or SessionStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # State

    @property
    def token(self) -> Optional[str]:
        return self.store.get(TOKEN_KEY)

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self.store.get(USER_KEY)

    @property
    def tenant(self) -> Optional[Dict[str, Any]]:
        return self.store.get(TENANT_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def set_tenant_subdomain(self, subdomain: Optional[str]) -> None:
        if subdomain:
            self.store.set(SUBDOMAIN_KEY, subdomain)
        else:
            self.store.remove(SUBDOMAIN_KEY)

    @property
    def tenant_subdomain(self) -> Optional[str]:
        """Host name subdomain first, stored subdomain as fallback."""
        return (
            subdomain_from_hostname(urlparse(self.base_url).hostname)
            or self.store.get(SUBDOMAIN_KEY)
        )

    def clear_session(self) -> None:
        self.store.remove(TOKEN_KEY, USER_KEY, TENANT_KEY)

    def _remember(self, auth: Dict[str, Any]) -> Dict[str, Any]:
        self.store.set(TOKEN_KEY, auth['token'])
        self.store.set(USER_KEY, auth.get('user'))
        self.store.set(TENANT_KEY, auth.get('tenant'))
        return auth

    # ------------------------------------------------------------------
    # Transport

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        subdomain = self.tenant_subdomain
        if subdomain:
            headers['X-Tenant-Subdomain'] = subdomain
        return headers

    def _send(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}/api{path}"
        response = self.session.request(
            method, url, headers=self._headers(), timeout=self.timeout, **kwargs
        )

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code == 401:
            self.clear_session()
            raise SessionExpired(401, body.get('error') or 'Unauthorized')

        return response, body

    def request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request and return the decoded envelope."""
        response, body = self._send(method, path, **kwargs)

        if response.status_code >= 400 or body.get('success') is False:
            message = body.get('error') or body.get('message') or response.reason or 'Request failed'
            raise ApiError(response.status_code, message)

        return body

    # ------------------------------------------------------------------
    # Auth

    def login(self, email: str, password: str, subdomain: Optional[str] = None) -> Dict[str, Any]:
        payload = {'email': email, 'password': password}
        if subdomain:
            payload['subdomain'] = subdomain
        return self._remember(self.request('POST', '/auth/login', json=payload)['data'])

    def register(self, **user_data) -> Dict[str, Any]:
        """Keyword arguments are the camelCase register fields (firstName, businessType, ...)."""
        return self._remember(self.request('POST', '/auth/register', json=user_data)['data'])

    def logout(self) -> None:
        try:
            self.request('POST', '/auth/logout')
        finally:
            self.clear_session()

    def me(self) -> Dict[str, Any]:
        return self.request('GET', '/auth/me')['data']

    # ------------------------------------------------------------------
    # Dashboard

    def stats(self) -> Dict[str, Any]:
        return self.request('GET', '/dashboard/stats')['data']

    def recent_jobs(self, limit: Optional[int] = None):
        params = {'limit': limit} if limit else None
        return self.request('GET', '/dashboard/recent-jobs', params=params)['data']

    def revenue_chart(self) -> Dict[str, Any]:
        return self.request('GET', '/dashboard/revenue-chart')['data']

    def current_tenant(self) -> Dict[str, Any]:
        return self.request('GET', '/tenant')['data']

    # ------------------------------------------------------------------
    # Health

    def health(self) -> Dict[str, Any]:
        return self.request('GET', '/health')

    def health_detailed(self) -> Dict[str, Any]:
        """Returns the envelope even when the API answers 503."""
        response, body = self._send('GET', '/health/detailed')
        if response.status_code not in (200, 503):
            raise ApiError(response.status_code, body.get('error') or response.reason or 'Request failed')
        return body
