"""Firebase Auth ID token verification.

Tokens are issued by Firebase Auth on the web client; this service only
verifies them. Google's signing certificates are fetched by google-auth
(blocking ``requests`` transport), so verification runs in a worker thread.
"""

import asyncio
from typing import Any

import google.auth.exceptions
import google.auth.transport.requests
from google.oauth2 import id_token

_request = google.auth.transport.requests.Request()


def _verify(token: str, project_id: str | None) -> dict[str, Any]:
    return id_token.verify_firebase_token(token, _request, audience=project_id)


async def verify_id_token(token: str, project_id: str | None) -> dict[str, Any]:
    """Verify a Firebase ID token and return its claims.

    Enforces signature, expiry, issuer and (when project_id is set) audience,
    and requires a ``sub`` claim (the Firebase uid).

    Args:
        token: ID token from the ``Authorization: Bearer`` header.
        project_id: Firebase project whose tokens are accepted.

    Returns:
        Decoded claims (``sub``/``user_id``, ``email``, ``name``...).

    Raises:
        ValueError: If the token is invalid, expired, for another project,
            or the signing certificates cannot be fetched.
    """
    if not token:
        raise ValueError("Missing ID token")
    try:
        claims = await asyncio.to_thread(_verify, token, project_id)
    except google.auth.exceptions.GoogleAuthError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not claims or not claims.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return claims
