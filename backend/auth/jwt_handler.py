from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config

def create_access_token(
    claims: dict,
    expires_minutes: int | None = None,
    issued_at: datetime | None = None,
) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued = issued_at or datetime.now(timezone.utc)
    payload = dict(claims)
    payload.update({"exp": issued + timedelta(minutes=expire_minutes), "iat": issued})
    return jwt.encode(payload, config.ACCESS_TOKEN_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, config.ACCESS_TOKEN_SECRET, algorithms=[config.JWT_ALGORITHM])
