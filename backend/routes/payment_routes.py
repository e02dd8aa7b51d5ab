from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import verify_token
from backend.database import get_db
from backend.errors import internal_error
from backend.models.payment import Payment
from backend.payments import stripe_gateway
from backend.store import DocumentPayload, Lenient, insert_document, to_document

router = APIRouter(tags=['payments'])


class CreatePaymentIntentRequest(BaseModel):
    price: Any = None


class RecordPaymentRequest(DocumentPayload):
    email: Lenient[str] = None
    amount: Lenient[float] = None
    transaction_id: Lenient[str] = None
    date: Lenient[datetime] = None
    status: Lenient[str] = None


@router.post('/create-payment-intent')
def create_payment_intent(
    data: CreatePaymentIntentRequest,
    identity: dict = Depends(verify_token),
):
    try:
        client_secret = stripe_gateway.create_payment_intent(data.price)
    except (stripe_gateway.PaymentProcessorError, TypeError, ValueError, OverflowError) as exc:
        raise internal_error('Failed to create payment intent') from exc

    return {'clientSecret': client_secret}


# The record is trusted as sent; it is not checked against the processor.
@router.post('/payments')
def record_payment(
    data: RecordPaymentRequest,
    identity: dict = Depends(verify_token),
    db: Session = Depends(get_db),
):
    try:
        return insert_document(db, Payment, data)
    except SQLAlchemyError as exc:
        db.rollback()
        raise internal_error('Failed to record payment') from exc


@router.get('/payments')
def list_payments(identity: dict = Depends(verify_token), db: Session = Depends(get_db)):
    try:
        payments = db.query(Payment).order_by(Payment.date.desc().nulls_last()).all()
        return [to_document(payment) for payment in payments]
    except SQLAlchemyError as exc:
        raise internal_error('Failed to retrieve payment history') from exc
