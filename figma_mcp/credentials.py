"""Per-request tenant credentials.

A tenant is identified only by the headers on its request: there is no
server-side record, and credentials are never read from the environment.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import AuthenticationError

TOKEN_HEADER = "X-Figma-Token"
BASE_URL_HEADER = "X-Figma-Base-URL"


@dataclass(frozen=True)
class TenantCredentials:
    """Figma credentials for a single inbound request."""

    access_token: Optional[str] = field(default=None, repr=False)
    base_url: Optional[str] = None


def parse_tenant_credentials(headers: Mapping[str, str]) -> TenantCredentials:
    """Read the tenant's token and optional base URL from request headers.

    ``headers`` should be case-insensitive (Starlette's ``Headers`` is).
    Missing or empty headers become ``None``; nothing is validated here.
    """
    token = headers.get(TOKEN_HEADER) or None
    base_url = headers.get(BASE_URL_HEADER) or None
    if base_url:
        base_url = base_url.rstrip("/")
    return TenantCredentials(access_token=token, base_url=base_url)


def validate_credentials(credentials: TenantCredentials) -> None:
    """Raise :class:`AuthenticationError` if no access token was supplied."""
    if not credentials.access_token:
        raise AuthenticationError(
            f"Missing credentials. Provide {TOKEN_HEADER} header with your "
            "Figma personal access token."
        )
