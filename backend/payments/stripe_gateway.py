import logging

import stripe

from backend.core import config

logger = logging.getLogger(__name__)


class PaymentProcessorError(RuntimeError):
    """Raised when the payment processor cannot create a payment intent."""


def _get_stripe():
    if not config.PAYMENT_SECRET_KEY:
        raise PaymentProcessorError("payment_secret_key_missing")

    stripe.api_key = config.PAYMENT_SECRET_KEY
    return stripe


def to_minor_units(price) -> int:
    """Convert a major-currency price (e.g. dollars) to minor units (cents)."""
    return int(round(float(price) * 100))


def create_payment_intent(price) -> str:
    """Create a card PaymentIntent for ``price`` and return its client secret."""
    amount = to_minor_units(price)
    client = _get_stripe()

    logger.info("Creating payment intent for %s %s", amount, config.PAYMENT_CURRENCY)
    try:
        intent = client.PaymentIntent.create(
            amount=amount,
            currency=config.PAYMENT_CURRENCY,
            payment_method_types=["card"],
        )
    except stripe.StripeError as exc:
        raise PaymentProcessorError(str(exc)) from exc

    return intent.client_secret
