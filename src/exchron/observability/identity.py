from typing import Dict, Optional
from fastapi import Request
from jose import jwt
from jose.exceptions import JOSEError


def extract_user_identity(request: Optional[Request], payload: Dict) -> str:
    """
    Resolve who sent a request, for audit records only.

    Order:
    1. Reverse-proxy forwarded user header
    2. JWT bearer token (signature not verified)
    3. Payload
    4. Fallback to anonymous
    """
    if request is not None:
        # Reverse proxy header (e.g. oauth2-proxy)
        user_email = request.headers.get("X-Forwarded-User") or request.headers.get("X-Forwarded-Email")
        if user_email:
            return user_email.split(":")[-1]

        # JWT fallback
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            token = auth_header.split(" ", 1)[1]
            try:
                decoded = jwt.get_unverified_claims(token)
                return decoded.get("email") or decoded.get("sub") or "unknown_user"
            except JOSEError:
                pass

    # Payload fallback
    if isinstance(payload, dict) and payload.get("user_id"):
        return str(payload["user_id"])

    return "anonymous"
