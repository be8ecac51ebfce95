"""
Payment recorder: the only writer of payments and amount_paid.

Each operation:
1. Validates the amount (positive, within the balance due)
2. Locks the registration row for the rest of the transaction
3. Inserts or completes the Payment row
4. Increments registration.amount_paid
5. Confirms the registration when the balance reaches zero

Steps 3-5 are a single unit: the service only flushes, and the
caller commits once or rolls back everything. A payment is never
durable without the balance update it implies, and vice versa.

Gateway confirmations are idempotent on the gateway transaction
id. Confirming the same id twice returns the existing payment
without touching the balance.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from league_registry.errors import (
    ExceedsBalanceDue,
    GatewayUnavailable,
    InvalidAmount,
    PaymentNotSucceeded,
    PaymentRegistrationMismatch,
)
from league_registry.models.enums import (
    PaymentMethod,
    PaymentStatus,
    RegistrationStatus,
)
from league_registry.models.payment import Payment
from league_registry.models.registration import Registration
from league_registry.services.audit import record_event
from league_registry.services.payment_gateway import GatewayIntent, PaymentGateway
from league_registry.services.registration_ledger import RegistrationLedger

logger = logging.getLogger(__name__)


class PaymentRecorder:

    def __init__(self, db: Session, gateway: PaymentGateway | None = None):
        self.db = db
        self.gateway = gateway
        self.ledger = RegistrationLedger(db)

    def record_payment(
        self,
        registration_id: int,
        amount: Decimal,
        method: PaymentMethod,
        gateway_transaction_id: str | None = None,
    ) -> Payment:
        """
        Record a completed payment against a registration.

        Raises InvalidAmount for amount <= 0 and ExceedsBalanceDue
        when the payment would take amount_paid past the program fee.
        """
        self._validate_amount(amount)
        registration = self.ledger.get(registration_id, for_update=True)
        self._check_balance(registration, amount)

        payment = Payment(
            registration_id=registration.id,
            amount=amount,
            method=method,
            status=PaymentStatus.COMPLETED,
            gateway_transaction_id=gateway_transaction_id,
            processed_at=datetime.utcnow(),
        )
        self.db.add(payment)
        self._apply_to_registration(registration, payment)
        self.db.flush()
        return payment

    def create_payment_intent(
        self, registration_id: int, amount: Decimal, currency: str
    ) -> tuple[Payment, GatewayIntent]:
        """
        Open a gateway payment intent for part or all of the balance.

        A pending Payment keyed by the intent id is stored so the
        later confirmation completes that row instead of adding one.
        """
        self._validate_amount(amount)
        registration = self.ledger.get(registration_id)
        self._check_balance(registration, amount)
        gateway = self._require_gateway()

        intent = gateway.create_intent(
            amount, currency, {"registration_id": str(registration.id)}
        )
        payment = Payment(
            registration_id=registration.id,
            amount=amount,
            method=PaymentMethod.CARD,
            status=PaymentStatus.PENDING,
            gateway_transaction_id=intent.id,
        )
        self.db.add(payment)
        self.db.flush()
        logger.info(
            "Payment intent %s opened for registration %s amount=%s",
            intent.id, registration.id, amount,
        )
        return payment, intent

    def confirm_gateway_payment(
        self, gateway_transaction_id: str, registration_id: int
    ) -> tuple[Payment, bool]:
        """
        Record a payment the gateway reports as succeeded.

        Returns (payment, replayed). replayed is True when this
        transaction id was already confirmed; nothing changes then.
        """
        registration = self.ledger.get(registration_id, for_update=True)

        # Checked after taking the registration lock so a concurrent
        # confirmation of the same id is seen once it commits.
        existing = self._find_by_gateway_id(gateway_transaction_id)
        if existing and existing.registration_id != registration.id:
            raise PaymentRegistrationMismatch(
                f"Transaction {gateway_transaction_id} belongs to "
                f"registration {existing.registration_id}",
            )
        if existing and existing.status == PaymentStatus.COMPLETED:
            logger.info(
                "Replayed confirmation of %s for registration %s ignored",
                gateway_transaction_id, registration.id,
            )
            return existing, True

        gateway = self._require_gateway()
        intent = gateway.retrieve_intent(gateway_transaction_id)
        if not intent.succeeded:
            raise PaymentNotSucceeded(
                f"Payment {gateway_transaction_id} has not succeeded",
                gateway_status=intent.status,
            )

        intended_for = intent.metadata.get("registration_id")
        if intended_for is not None and intended_for != str(registration.id):
            raise PaymentRegistrationMismatch(
                f"Transaction {gateway_transaction_id} was issued for "
                f"registration {intended_for}",
            )

        amount = intent.amount
        self._validate_amount(amount)
        self._check_balance(registration, amount)

        if existing:
            payment = existing
            payment.amount = amount
            payment.status = PaymentStatus.COMPLETED
            payment.processed_at = datetime.utcnow()
        else:
            payment = Payment(
                registration_id=registration.id,
                amount=amount,
                method=PaymentMethod.CARD,
                status=PaymentStatus.COMPLETED,
                gateway_transaction_id=gateway_transaction_id,
                processed_at=datetime.utcnow(),
            )
            self.db.add(payment)

        self._apply_to_registration(registration, payment)
        self.db.flush()
        return payment, False

    def list_payments(
        self,
        registration_id: int | None = None,
        status: PaymentStatus | None = None,
    ) -> list[Payment]:
        """Payments newest first, optionally filtered."""
        stmt = select(Payment)
        if registration_id is not None:
            stmt = stmt.where(Payment.registration_id == registration_id)
        if status is not None:
            stmt = stmt.where(Payment.status == status)
        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    # --- internals ---

    def _apply_to_registration(
        self, registration: Registration, payment: Payment
    ) -> None:
        """Increment amount_paid and confirm on zero balance."""
        registration.amount_paid = (
            (registration.amount_paid or Decimal("0")) + payment.amount
        )
        record_event(
            self.db, "payment.recorded", registration.id,
            amount=payment.amount,
            method=payment.method.value,
            gateway_transaction_id=payment.gateway_transaction_id,
            amount_paid=registration.amount_paid,
        )
        logger.info(
            "Payment of %s recorded for registration %s (paid=%s, due=%s)",
            payment.amount, registration.id,
            registration.amount_paid, registration.balance_due,
        )

        if registration.balance_due != 0:
            return

        if registration.status == RegistrationStatus.CANCELLED:
            # Operator error: money taken for a cancelled enrollment.
            # The cancellation stands; someone has to refund.
            logger.warning(
                "Registration %s is cancelled but now fully paid", registration.id
            )
            record_event(
                self.db, "registration.paid_while_cancelled", registration.id,
                amount_paid=registration.amount_paid,
            )
        elif registration.status != RegistrationStatus.CONFIRMED:
            old_status = registration.status
            registration.status = RegistrationStatus.CONFIRMED
            record_event(
                self.db, "registration.status_changed", registration.id,
                old_status=old_status.value,
                new_status=RegistrationStatus.CONFIRMED.value,
                reason="paid in full",
            )
            logger.info(
                "Registration %s confirmed: paid in full", registration.id
            )

    @staticmethod
    def _validate_amount(amount: Decimal) -> None:
        if amount is None or amount <= 0:
            raise InvalidAmount(
                "Payment amount must be greater than zero",
                amount_requested=amount,
            )

    @staticmethod
    def _check_balance(registration: Registration, amount: Decimal) -> None:
        balance_due = registration.balance_due
        if amount > balance_due:
            raise ExceedsBalanceDue(
                f"Payment of {amount} exceeds balance due of {balance_due}",
                balance_due=balance_due,
                amount_requested=amount,
            )

    def _require_gateway(self) -> PaymentGateway:
        if self.gateway is None:
            raise GatewayUnavailable("Payment gateway is not configured")
        return self.gateway

    def _find_by_gateway_id(self, gateway_transaction_id: str) -> Payment | None:
        return self.db.execute(
            select(Payment).where(
                Payment.gateway_transaction_id == gateway_transaction_id
            )
        ).scalar_one_or_none()
