from __future__ import annotations

from jose import JWTError, jwt


class InvalidTokenError(ValueError):
    pass


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """Return the user id carried by a token issued by the auth service."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as exc:
        raise InvalidTokenError("Invalid or expired token") from exc

    user_id = payload.get("userId") or payload.get("sub")
    if user_id is None or str(user_id).strip() == "":
        raise InvalidTokenError("Token does not identify a user")
    return str(user_id)
