from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.database import get_db
from backend.models.user import ROLE_ADMIN, ROLE_INSTRUCTOR, User

security = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "unauthorized access"
FORBIDDEN_MESSAGE = "forbidden access"


def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE)

    try:
        return jwt_handler.decode_access_token(credentials.credentials)
    except Exception as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED_MESSAGE) from exc


def check_role(db: Session, email: str | None, role: str) -> User:
    """Return the user stored for ``email`` if it holds ``role``, else raise 403."""
    user = None
    if email:
        user = db.query(User).filter(User.email == email).first()
    if user is None or user.role != role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=FORBIDDEN_MESSAGE)
    return user


def require_admin(
    identity: dict = Depends(verify_token),
    db: Session = Depends(get_db),
) -> dict:
    check_role(db, identity.get("email"), ROLE_ADMIN)
    return identity


def require_instructor(
    identity: dict = Depends(verify_token),
    db: Session = Depends(get_db),
) -> dict:
    check_role(db, identity.get("email"), ROLE_INSTRUCTOR)
    return identity
