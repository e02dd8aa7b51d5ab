from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.errors import internal_error
from backend.models.booked_class import BookedClass
from backend.store import DocumentPayload, Lenient, delete_by_id, insert_document, to_document

router = APIRouter(tags=['bookings'])


class BookClassRequest(DocumentPayload):
    email: Lenient[str] = None
    class_id: Lenient[str] = None
    class_name: Lenient[str] = None
    image: Lenient[str] = None
    instructor_name: Lenient[str] = None
    price: Lenient[float] = None


@router.post('/bookedClass')
def book_class(data: BookClassRequest, db: Session = Depends(get_db)):
    try:
        return insert_document(db, BookedClass, data)
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to book class') from exc


@router.get('/bookedClass')
def list_booked_classes(email: str | None = Query(default=None), db: Session = Depends(get_db)):
    if not email:
        return []

    try:
        bookings = db.query(BookedClass).filter(BookedClass.email == email).all()
        return [to_document(booking) for booking in bookings]
    except SQLAlchemyError as exc:
        raise internal_error('Failed to retrieve booked classes') from exc


@router.delete('/bookedClass/{booking_id}')
def delete_booked_class(booking_id: str, db: Session = Depends(get_db)):
    try:
        return delete_by_id(db, BookedClass, booking_id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to delete booked class') from exc
