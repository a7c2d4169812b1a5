# savings/services.py

"""
Savings Business Logic Services

Contains the transaction cascade:
- Recording a transaction stores it, then runs CASCADE_STEPS in order:
    1. apply_to_savings - completed deposits, repayments and dividends credit
       the member's savings; completed withdrawals debit it
    2. apply_to_loans   - repayments are allocated to the member's oldest
       active loan
- Savings account opening and lookups
- Transaction queries and status updates

Every write runs inside store.atomic(): if a step fails, the transaction
and all earlier steps are rolled back and the error propagates.
"""

from django.conf import settings
from django.utils import timezone
from decimal import Decimal
import logging

from core.exceptions import NotFound, InvalidArgument, InvariantViolation
from core.signals import transaction_recorded
from core.store import get_store
from core.utils import ensure_aware, format_money, to_decimal
from .models import Transaction, Saving
from .utils import (
    EDITABLE_TRANSACTION_FIELDS,
    validate_transaction,
    validate_withdrawal_balance,
    can_change_transaction_status,
    affects_savings,
    get_savings_delta,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SAVINGS ACCOUNT SERVICES
# =============================================================================

class SavingsService:
    """Savings accounts are opened with a member and changed only by cascades"""

    def __init__(self, store=None):
        self.store = store or get_store()

    def open_account(self, member_id):
        saving = self.store.savings.create(Saving(
            member_id=member_id,
            total_savings=Decimal('0.00'),
            last_update=timezone.now(),
        ))
        logger.info(f"Opened savings account #{saving.id} for member #{member_id}")
        return saving

    def get_saving(self, saving_id):
        return self.store.savings.get(saving_id)

    def get_saving_by_member(self, member_id):
        return self.store.savings.first(member_id=member_id)

    def list_savings(self):
        return self.store.savings.all()

    def require_account(self, member_id):
        """
        Every member owns exactly one savings account.

        Raises:
            InvariantViolation: the member has none
        """
        saving = self.get_saving_by_member(member_id)
        if saving is None:
            logger.critical(f"Member #{member_id} has no savings account")
            raise InvariantViolation(f"Member #{member_id} has no savings account")
        return saving

    def apply_delta(self, member_id, delta):
        """Add a signed amount to the member's balance. No floor at zero."""
        saving = self.require_account(member_id)
        new_total = saving.total_savings + delta

        saving = self.store.savings.update(
            saving.id,
            total_savings=new_total,
            last_update=timezone.now(),
        )
        logger.debug(f"Savings of member #{member_id}: {delta:+} -> {new_total}")

        if new_total < 0:
            logger.warning(f"Savings of member #{member_id} are negative: {new_total}")
        return saving


# =============================================================================
# TRANSACTION SERVICES
# =============================================================================

class TransactionService:
    """Record transactions and run their cascade"""

    CASCADE_STEPS = (
        'apply_to_savings',
        'apply_to_loans',
    )

    def __init__(self, store=None):
        self.store = store or get_store()
        self.savings = SavingsService(self.store)

    def record_transaction(self, member_id, transaction_type, amount, date=None,
                           description=None, status='pending'):
        """
        Store a transaction and run every cascade step.

        Args:
            member_id: Member the money belongs to
            transaction_type: deposit, withdrawal, loan_disbursement,
                loan_repayment or dividend_payment
            amount: Positive amount
            date: Transaction date (defaults to now)
            description: Optional free text
            status: completed, pending, cancelled or failed

        Returns:
            Transaction: the stored transaction

        Raises:
            InvalidArgument: unknown type/status, amount <= 0, or an
                overdraft when COOP_ALLOW_NEGATIVE_SAVINGS is off
            NotFound: member does not exist
        """
        amount = to_decimal(amount)
        is_valid, message = validate_transaction(transaction_type, amount, status)
        if not is_valid:
            raise InvalidArgument(message)

        with self.store.atomic():
            if self.store.members.get(member_id) is None:
                raise NotFound('Member', member_id)

            if transaction_type == 'withdrawal' and status == 'completed':
                self._check_overdraft(member_id, amount)

            txn = self.store.transactions.create(Transaction(
                member_id=member_id,
                type=transaction_type,
                amount=amount,
                date=ensure_aware(date) or timezone.now(),
                description=description,
                status=status,
            ))

            for step in self.CASCADE_STEPS:
                getattr(self, step)(txn)

            self.store.on_commit(
                lambda: transaction_recorded.send(sender=Transaction, transaction=txn)
            )

        logger.info(
            f"Recorded {txn.type} #{txn.id} for member #{member_id}: "
            f"{format_money(txn.amount)} ({txn.status})"
        )
        return txn

    # -------------------------------------------------------------------------
    # Cascade steps
    # -------------------------------------------------------------------------

    def apply_to_savings(self, txn):
        """Credit or debit savings for a completed savings-affecting transaction"""
        if not txn.is_completed or not affects_savings(txn):
            return None
        return self.savings.apply_delta(txn.member_id, get_savings_delta(txn))

    def apply_to_loans(self, txn):
        """Allocate a repayment to the member's oldest active loan"""
        if txn.type != 'loan_repayment':
            return None

        from loans.services import LoanService
        return LoanService(self.store).apply_repayment(txn.member_id, txn.amount)

    def _check_overdraft(self, member_id, amount):
        if getattr(settings, 'COOP_ALLOW_NEGATIVE_SAVINGS', True):
            return
        saving = self.savings.require_account(member_id)
        is_valid, message = validate_withdrawal_balance(saving.total_savings, amount)
        if not is_valid:
            raise InvalidArgument(message)

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update_transaction(self, transaction_id, **changes):
        """
        Update the description or status of a recorded transaction.

        Moving a savings-affecting transaction to completed applies its
        savings effect; completed transactions are final.

        Raises:
            NotFound: unknown transaction
            InvalidArgument: any other field, unknown status or a change
                away from completed
        """
        blocked = sorted(set(changes) - set(EDITABLE_TRANSACTION_FIELDS))
        if blocked:
            raise InvalidArgument(f"Transaction field(s) cannot be changed: {', '.join(blocked)}")

        with self.store.atomic():
            txn = self.store.transactions.get(transaction_id)
            if txn is None:
                raise NotFound('Transaction', transaction_id)

            new_status = changes.get('status', txn.status)
            is_allowed, message = can_change_transaction_status(txn.status, new_status)
            if not is_allowed:
                raise InvalidArgument(message)

            if txn.type == 'withdrawal' and new_status == 'completed' and not txn.is_completed:
                self._check_overdraft(txn.member_id, txn.amount)

            was_completed = txn.is_completed
            txn = self.store.transactions.update(transaction_id, **changes)

            if txn.is_completed and not was_completed:
                self.apply_to_savings(txn)
                logger.info(f"Transaction #{txn.id} completed")

        return txn

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_transaction(self, transaction_id):
        return self.store.transactions.get(transaction_id)

    def list_member_transactions(self, member_id):
        return self.store.transactions.filter_by(member_id=member_id)

    def get_recent_transactions(self, limit=None):
        """Most recent transactions first"""
        if limit is None:
            limit = getattr(settings, 'COOP_RECENT_TRANSACTIONS_LIMIT', 10)
        if limit < 0:
            raise InvalidArgument('Limit cannot be negative')

        transactions = sorted(
            self.store.transactions.all(),
            key=lambda txn: (txn.date, txn.id),
            reverse=True,
        )
        return transactions[:limit]
