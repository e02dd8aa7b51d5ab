from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import verify_token
from backend.database import get_db
from backend.errors import internal_error
from backend.models.user import ROLE_ADMIN, ROLE_INSTRUCTOR, ROLE_STUDENT, User
from backend.store import DocumentPayload, Lenient, Unparsed, insert_document, to_document, update_by_id

router = APIRouter(tags=['users'])

USER_EXISTS_MESSAGE = 'User Already Exists'
PROTECTED_USER_FIELDS = frozenset({'role'})


class CreateUserRequest(DocumentPayload):
    email: Lenient[str] = None
    name: Lenient[str] = None
    photo: Lenient[str] = None


def has_role(email: str, identity: dict, role: str, db: Session) -> bool:
    # A token may only ask about its own email.
    if identity.get('email') != email:
        return False

    user = db.query(User).filter(User.email == email).first()
    return user is not None and user.role == role


def promote_user(user_id: str, role: str, db: Session) -> dict:
    try:
        return update_by_id(db, User, user_id, {'role': role})
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to update user role') from exc


@router.get('/users')
def list_users(db: Session = Depends(get_db)):
    try:
        return [to_document(user) for user in db.query(User).all()]
    except SQLAlchemyError as exc:
        raise internal_error('Failed to retrieve users') from exc


@router.post('/users')
def create_user(data: CreateUserRequest, db: Session = Depends(get_db)):
    try:
        existing_user = None
        # A non-string email is kept in details and never matches a stored email.
        if not isinstance(data.email, Unparsed):
            existing_user = db.query(User).filter(User.email == data.email).first()
        if existing_user:
            return {'message': USER_EXISTS_MESSAGE}

        return insert_document(db, User, data, protected=PROTECTED_USER_FIELDS)
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to create user') from exc


@router.get('/users/admin/{email}')
def is_admin(email: str, identity: dict = Depends(verify_token), db: Session = Depends(get_db)):
    try:
        return {'admin': has_role(email, identity, ROLE_ADMIN, db)}
    except SQLAlchemyError as exc:
        raise internal_error('Failed to check user role') from exc


# Unguarded: any caller can promote any user id.
@router.patch('/users/admin/{user_id}')
def make_admin(user_id: str, db: Session = Depends(get_db)):
    return promote_user(user_id, ROLE_ADMIN, db)


@router.get('/users/instructor/{email}')
def is_instructor(email: str, identity: dict = Depends(verify_token), db: Session = Depends(get_db)):
    try:
        return {'instructor': has_role(email, identity, ROLE_INSTRUCTOR, db)}
    except SQLAlchemyError as exc:
        raise internal_error('Failed to check user role') from exc


@router.patch('/users/instructor/{user_id}')
def make_instructor(user_id: str, db: Session = Depends(get_db)):
    return promote_user(user_id, ROLE_INSTRUCTOR, db)


@router.get('/users/student/{email}')
def is_student(email: str, identity: dict = Depends(verify_token), db: Session = Depends(get_db)):
    try:
        return {'student': has_role(email, identity, ROLE_STUDENT, db)}
    except SQLAlchemyError as exc:
        raise internal_error('Failed to check user role') from exc
