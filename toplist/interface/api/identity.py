"""Resolve who is voting from an incoming request."""

from fastapi import Request
from pydantic import ValidationError

from toplist.config import AuthSettings, NetworkSettings
from toplist.domain.service import JWTService
from toplist.domain.value import VoterIdentity
from toplist.interface.error import IdentityResolutionError


def extract_token(request: Request, cookie_name: str) -> str | None:
    """Read a JWT from the auth cookie or a Bearer Authorization header.

    The cookie wins when both are present.
    """
    token = request.cookies.get(cookie_name)
    if token:
        return token

    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def client_ip(request: Request, network_settings: NetworkSettings) -> str:
    """Network address of the caller.

    Behind trusted proxies the address is taken from the right of
    ``X-Forwarded-For``, skipping one hop per proxy after the first, since
    each proxy appends the peer it saw.

    Raises:
        IdentityResolutionError: If no address is available
    """
    if network_settings.trust_forwarded_for:
        hops = [
            hop.strip()
            for hop in request.headers.get("x-forwarded-for", "").split(",")
            if hop.strip()
        ]
        if hops:
            return hops[-min(network_settings.trusted_proxy_count, len(hops))]

    if request.client and request.client.host:
        return request.client.host

    raise IdentityResolutionError("Could not determine client address")


def resolve_voter(
    request: Request,
    jwt_service: JWTService,
    auth_settings: AuthSettings,
    network_settings: NetworkSettings,
) -> VoterIdentity:
    """Build the voter identity for a request.

    Missing or invalid tokens yield an anonymous identity rather than an
    error, since voting does not require an account.

    Raises:
        IdentityResolutionError: If the client address is missing or unusable
    """
    user_id = jwt_service.get_user_id_from_token(
        extract_token(request, auth_settings.cookie_name)
    )
    try:
        return VoterIdentity(
            ip_address=client_ip(request, network_settings), user_id=user_id
        )
    except ValidationError as e:
        raise IdentityResolutionError("Invalid client address") from e
