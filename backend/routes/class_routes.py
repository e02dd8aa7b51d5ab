from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import require_admin, verify_token
from backend.database import get_db
from backend.errors import internal_error
from backend.models.sport_class import SportClass
from backend.store import DocumentPayload, Lenient, insert_document, to_document, update_by_id

router = APIRouter(tags=['classes'])


class CreateClassRequest(DocumentPayload):
    name: Lenient[str] = None
    image: Lenient[str] = None
    instructor_name: Lenient[str] = None
    instructor_email: Lenient[str] = None
    available_seats: Lenient[int] = None
    price: Lenient[float] = None
    status: Lenient[str] = None
    feedback: Lenient[str] = None


class UpdateClassStatusRequest(BaseModel):
    status: Any = None


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    class_id: Any = None
    feedback: Any = None


@router.post('/classes')
def create_class(data: CreateClassRequest, db: Session = Depends(get_db)):
    try:
        return insert_document(db, SportClass, data)
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to create class') from exc


@router.get('/classes')
def list_classes(db: Session = Depends(get_db)):
    try:
        return [to_document(sport_class) for sport_class in db.query(SportClass).all()]
    except SQLAlchemyError as exc:
        raise internal_error('Failed to retrieve classes') from exc


@router.patch('/classes/{class_id}')
def update_class_status(
    class_id: str,
    data: UpdateClassStatusRequest,
    identity: dict = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return update_by_id(db, SportClass, class_id, {'status': data.status})
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to update class status') from exc


@router.post('/feedback')
def submit_feedback(
    data: FeedbackRequest,
    identity: dict = Depends(verify_token),
    db: Session = Depends(get_db),
):
    try:
        return update_by_id(db, SportClass, data.class_id, {'feedback': data.feedback})
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to submit feedback') from exc
