"""Bearer token challenge handling.

Reference: https://httpwg.org/specs/rfc9110.html#field.www-authenticate
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import ImageReference

CHALLENGE_PATTERN = re.compile(r'\s*([^ ]+) realm="([^"]*)", *service="([^"]*)"')


@dataclass(frozen=True)
class AuthChallenge:
    """Parsed ``WWW-Authenticate`` challenge."""

    scheme: str
    realm: str
    service: str

    def credential(self, token: str) -> str:
        """Authorization header value for a token issued for this challenge."""
        return f"{self.scheme} {token}"


def parse_www_authenticate(header: Optional[str]) -> Optional[AuthChallenge]:
    """Parse ``<scheme> realm="<url>", service="<service>"``.

    Returns None for a missing or unrecognized header.
    """
    if not header:
        return None

    match = CHALLENGE_PATTERN.match(header)
    if not match:
        return None

    scheme, realm, service = match.groups()
    return AuthChallenge(scheme=scheme, realm=realm, service=service)


def pull_scopes(references: Iterable[ImageReference]) -> list[str]:
    """One pull scope per distinct repository, in first-seen order."""
    scopes: list[str] = []
    for reference in references:
        scope = f"repository:{reference.repository}:pull"
        if scope not in scopes:
            scopes.append(scope)
    return scopes


def build_token_params(
    challenge: AuthChallenge, references: Iterable[ImageReference]
) -> list[tuple[str, str]]:
    """Query parameters for the token request."""
    params = [("scope", scope) for scope in pull_scopes(references)]
    params.append(("service", challenge.service))
    return params
