"""
Stripe payment processor client
Creates payment intents and checks their outcome
"""

import os
import logging
from typing import Dict, NamedTuple, Optional

import stripe
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class PaymentProcessorError(Exception):
    """Raised when the processor is unavailable or rejects a call."""


class PaidIntent(NamedTuple):
    amount: int  # minor units
    metadata: Dict[str, str]


class PaymentProcessor:
    """Thin wrapper around the Stripe PaymentIntent API"""

    def __init__(self, api_key: Optional[str] = None, currency: Optional[str] = None):
        self.api_key = api_key if api_key is not None else os.getenv("STRIPE_SECRET_KEY")
        self.currency = (currency or os.getenv("PAYMENT_CURRENCY", "usd")).lower()
        self.verify_payments = os.getenv("VERIFY_PAYMENTS", "true").lower() in {
            "1",
            "true",
            "yes",
        }

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def create_payment_intent(
        self, amount: int, metadata: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Create a card payment intent

        Args:
            amount: Amount in minor units (cents)
            metadata: Extra key/values stored on the intent

        Returns:
            The intent's client secret
        """
        if not self.is_configured():
            raise PaymentProcessorError("STRIPE_SECRET_KEY is not set")

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
                metadata=metadata or {},
                api_key=self.api_key,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating payment intent: {e}")
            raise PaymentProcessorError(str(e)) from e

        logger.info(f"Payment intent {intent.id} created for {amount} {self.currency}")
        return intent.client_secret

    def get_paid_intent(self, intent_id: str) -> Optional[PaidIntent]:
        """
        Look up a payment intent

        Returns:
            The received amount in minor units and the intent's metadata when
            the intent succeeded, else None
        """
        if not self.is_configured():
            raise PaymentProcessorError("STRIPE_SECRET_KEY is not set")

        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            logger.warning(f"Unknown payment intent {intent_id}: {e}")
            return None
        except stripe.StripeError as e:
            logger.error(f"Stripe error retrieving payment intent {intent_id}: {e}")
            raise PaymentProcessorError(str(e)) from e

        if intent.status != "succeeded":
            logger.warning(f"Payment intent {intent_id} has status {intent.status}")
            return None
        return PaidIntent(
            amount=intent.amount_received or intent.amount,
            metadata=dict(intent.metadata or {}),
        )


# Global payment processor instance
payment_processor = PaymentProcessor()


def get_payment_processor() -> PaymentProcessor:
    return payment_processor
