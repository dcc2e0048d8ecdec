"""
Tenant resolution middleware.

Maps the inbound request to a tenant row and stores it on flask.g.tenant.

Resolution order:
    1. Host header subdomain   (acme.dashboard.com -> "acme")
    2. X-Tenant-Subdomain header (API clients)
    3. ?tenant= query parameter   (development)
    4. DEFAULT_TENANT_SUBDOMAIN when the host is localhost
"""
import re
from typing import Optional

from flask import current_app, g, request

from bizboard.errors import AppError
from bizboard.models.tenant import Tenant, normalize_subdomain

TENANT_HEADER = 'X-Tenant-Subdomain'
TENANT_QUERY_PARAM = 'tenant'

_IPV4_RE = re.compile(r'^\d+\.\d+\.\d+\.\d+$')


def extract_subdomain_from_host(host: Optional[str]) -> Optional[str]:
    """
    Extract the tenant subdomain from a Host header value.

    Examples:
    - "demo.dashboard.com"       -> "demo"
    - "demo.dashboard.com:8080"  -> "demo"
    - "dashboard.com"            -> None (root domain)
    - "localhost:3000"           -> None
    - "10.0.0.12"                -> None (IP address, not a host name)
    """
    if not host:
        return None

    hostname = host.split(':')[0].lower()
    if _IPV4_RE.match(hostname):
        return None

    parts = hostname.split('.')
    if len(parts) > 2 and parts[0]:
        return parts[0]
    return None


def is_localhost(host: Optional[str]) -> bool:
    return bool(host) and (host == 'localhost' or host.startswith('localhost:'))


def resolve_subdomain(req) -> Optional[str]:
    """Apply the resolution order to a request; lowercase, or None when nothing matched."""
    host = req.headers.get('Host')

    subdomain = extract_subdomain_from_host(host)

    if not subdomain:
        subdomain = normalize_subdomain(req.headers.get(TENANT_HEADER)) or None

    if not subdomain:
        subdomain = normalize_subdomain(req.args.get(TENANT_QUERY_PARAM)) or None

    if not subdomain and is_localhost(host):
        subdomain = normalize_subdomain(current_app.config['DEFAULT_TENANT_SUBDOMAIN'])

    return subdomain


def is_exempt_path(path: str) -> bool:
    if not path.startswith('/api'):
        return True
    return any(path.startswith(prefix) for prefix in current_app.config['TENANT_EXEMPT_PATHS'])


def resolve_tenant():
    """
    before_request hook.

    Raises:
        AppError(400): No subdomain could be derived from the request
        AppError(404): Subdomain does not match any tenant
    Database errors propagate and become a 500.
    """
    g.tenant = None

    if request.method == 'OPTIONS' or is_exempt_path(request.path):
        return None

    subdomain = resolve_subdomain(request)
    if not subdomain:
        raise AppError("Tenant subdomain is required", 400)

    tenant = Tenant.query.filter_by(subdomain=subdomain).first()
    if tenant is None:
        current_app.logger.info("Tenant lookup miss: subdomain=%s path=%s", subdomain, request.path)
        raise AppError("Tenant not found", 404)

    g.tenant = tenant
    return None


def init_tenant_resolution(app):
    app.before_request(resolve_tenant)
