"""
JWT payload decoding (no signature verification).

Reads the claims of a token for display or routing decisions. This does NOT
verify the signature; never use it to make an authorization decision.
"""

import base64
import binascii
import json
from typing import Any, Dict

from utilkit.utils.errors import InvalidArgument


def decode_jwt_payload(token: str) -> Dict[str, Any]:
    """
    Decode the middle (payload) segment of a JWT.

    Args:
        token: Compact JWS string "header.payload.signature".

    Returns:
        The payload claims as a dict.

    Raises:
        InvalidArgument: If the token does not have three segments, the payload
                         is not valid base64url, or it does not hold a JSON object.
    """
    parts = token.split(".") if isinstance(token, str) else []
    if len(parts) != 3:
        raise InvalidArgument("JWT must have three dot-separated segments")

    segment = parts[1]
    # base64url without padding; restore it before decoding
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidArgument(f"JWT payload could not be decoded: {exc}") from exc

    if not isinstance(payload, dict):
        raise InvalidArgument("JWT payload must be a JSON object")
    return payload
