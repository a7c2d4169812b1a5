# loans/services.py

"""
Loans Business Logic Services

Contains the loan cascades:
- create_loan stores the loan, then runs CREATION_STEPS in order:
    1. queue_approval_task - pending loans get a loan_approval task
    2. disburse_on_creation - approved/active loans are paid out
- update_loan applies a partial update, then runs UPDATE_STEPS:
    1. disburse_on_approval - pending -> approved pays the loan out
- apply_repayment allocates a repayment to the oldest active loan

Disbursements are recorded through TransactionService, so they run the
transaction cascade (which leaves savings untouched for this type).
"""

from django.conf import settings
from django.utils import timezone
from datetime import timedelta
from decimal import Decimal
import logging

from core.exceptions import NotFound, InvalidArgument
from core.models import Task
from core.signals import loan_status_changed
from core.store import get_store
from core.utils import ensure_aware, format_money, to_decimal
from .models import Loan
from .utils import (
    DISBURSED_ON_CREATION,
    calculate_monthly_payment,
    calculate_next_payment_date,
    validate_loan_terms,
    validate_loan_status,
    can_transition_loan,
    select_repayment_target,
)

logger = logging.getLogger(__name__)


class LoanService:
    """Handle loan applications, approvals and repayments"""

    CREATION_STEPS = (
        'queue_approval_task',
        'disburse_on_creation',
    )

    UPDATE_STEPS = (
        'disburse_on_approval',
    )

    # total_repaid changes only through repayment transactions
    IMMUTABLE_FIELDS = ('id', 'member_id', 'total_repaid')

    # Required on application; an update may change them but not clear them
    REQUIRED_FIELDS = ('amount', 'interest_rate', 'term', 'purpose')

    def __init__(self, store=None):
        self.store = store or get_store()

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def create_loan(self, member_id, amount, interest_rate, term, purpose, status='pending',
                    monthly_payment=None, application_date=None, approval_date=None,
                    next_payment_due=None, total_repaid=Decimal('0.00')):
        """
        Store a loan application and run the creation cascade.

        When monthly_payment is omitted it is computed with the EMI formula.

        Raises:
            NotFound: member does not exist
            InvalidArgument: amount <= 0, negative rate, term < 1, unknown
                status or negative total_repaid
        """
        amount = to_decimal(amount, 'amount')
        interest_rate = to_decimal(interest_rate, 'interest_rate')
        total_repaid = to_decimal(total_repaid, 'total_repaid')

        is_valid, message = validate_loan_terms(amount, interest_rate, term)
        if not is_valid:
            raise InvalidArgument(message)
        is_valid, message = validate_loan_status(status)
        if not is_valid:
            raise InvalidArgument(message)
        if total_repaid < 0:
            raise InvalidArgument('Total repaid cannot be negative')

        if monthly_payment is None:
            monthly_payment = calculate_monthly_payment(amount, interest_rate, term)
        else:
            monthly_payment = to_decimal(monthly_payment, 'monthly_payment')

        now = timezone.now()
        approval_date = ensure_aware(approval_date)
        if status in DISBURSED_ON_CREATION and approval_date is None:
            approval_date = now

        with self.store.atomic():
            if self.store.members.get(member_id) is None:
                raise NotFound('Member', member_id)

            loan = self.store.loans.create(Loan(
                member_id=member_id,
                amount=amount,
                interest_rate=interest_rate,
                term=int(term),
                purpose=purpose,
                application_date=ensure_aware(application_date) or now,
                approval_date=approval_date,
                status=status,
                total_repaid=total_repaid,
                next_payment_due=ensure_aware(next_payment_due),
                monthly_payment=monthly_payment,
            ))

            for step in self.CREATION_STEPS:
                getattr(self, step)(loan)

            self.store.on_commit(
                lambda: loan_status_changed.send(sender=Loan, loan=loan, previous_status=None)
            )

        logger.info(
            f"Created loan #{loan.id} for member #{member_id}: {format_money(amount)} "
            f"over {loan.term} months at {interest_rate}% ({loan.status})"
        )
        return loan

    def queue_approval_task(self, loan):
        """Pending loans get a loan_approval task due in COOP_LOAN_APPROVAL_DUE_DAYS"""
        if loan.status != 'pending':
            return None

        from core.services import TaskService

        created_at = timezone.now()
        due_days = getattr(settings, 'COOP_LOAN_APPROVAL_DUE_DAYS', 3)
        return TaskService(self.store).create_task(
            title='Loan Approval Request',
            task_type=Task.LOAN_APPROVAL,
            description=(
                f"New loan application from member #{loan.member_id} "
                f"for {format_money(loan.amount)} (loan #{loan.id})"
            ),
            status='pending',
            created_at=created_at,
            due_date=created_at + timedelta(days=due_days),
        )

    def disburse_on_creation(self, loan):
        if loan.status not in DISBURSED_ON_CREATION:
            return None
        return self.record_disbursement(loan)

    def record_disbursement(self, loan):
        """Pay the full principal out as a completed loan_disbursement"""
        from savings.services import TransactionService

        txn = TransactionService(self.store).record_transaction(
            loan.member_id,
            'loan_disbursement',
            loan.amount,
            description=f"Loan disbursement for loan #{loan.id}",
            status='completed',
        )
        logger.info(f"Disbursed loan #{loan.id}: {format_money(loan.amount)} (transaction #{txn.id})")
        return txn

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update_loan(self, loan_id, **changes):
        """
        Apply a partial update and run the update cascade.

        Raises:
            NotFound: unknown loan
            InvalidArgument: immutable or cleared field, amount change after
                pending, illegal status transition or invalid financial terms
        """
        blocked = [name for name in self.IMMUTABLE_FIELDS if name in changes]
        if blocked:
            raise InvalidArgument(f"Loan field(s) cannot be changed: {', '.join(blocked)}")

        cleared = [name for name in self.REQUIRED_FIELDS if name in changes and changes[name] in (None, '')]
        if cleared:
            raise InvalidArgument(f"Loan field(s) cannot be empty: {', '.join(cleared)}")

        for name in ('amount', 'interest_rate', 'monthly_payment'):
            if changes.get(name) is not None:
                changes[name] = to_decimal(changes[name], name)
        for name in ('application_date', 'approval_date', 'next_payment_due'):
            if name in changes:
                changes[name] = ensure_aware(changes[name])

        with self.store.atomic():
            previous = self.require_loan(loan_id)

            # Principal is fixed once the loan leaves pending
            if previous.status != 'pending' and changes.get('amount', previous.amount) != previous.amount:
                raise InvalidArgument(f"Loan amount cannot change once the loan is {previous.status}")

            is_valid, message = validate_loan_terms(
                changes.get('amount', previous.amount),
                changes.get('interest_rate', previous.interest_rate),
                changes.get('term', previous.term),
            )
            if not is_valid:
                raise InvalidArgument(message)

            new_status = changes.get('status', previous.status)
            is_allowed, message = can_transition_loan(previous.status, new_status)
            if not is_allowed:
                raise InvalidArgument(message)

            if previous.status == 'pending' and new_status == 'approved':
                changes.setdefault('approval_date', timezone.now())
            if previous.status == 'approved' and new_status == 'active':
                if not changes.get('next_payment_due') and not previous.next_payment_due:
                    changes['next_payment_due'] = calculate_next_payment_date(timezone.now())

            loan = self.store.loans.update(loan_id, **changes)

            for step in self.UPDATE_STEPS:
                getattr(self, step)(previous, loan)

            if loan.status != previous.status:
                self.store.on_commit(
                    lambda: loan_status_changed.send(
                        sender=Loan, loan=loan, previous_status=previous.status
                    )
                )

        return loan

    def disburse_on_approval(self, previous, loan):
        """Only pending -> approved pays out, using the amount as approved"""
        if previous.status == 'pending' and loan.status == 'approved':
            return self.record_disbursement(loan)
        return None

    # -------------------------------------------------------------------------
    # Repayments
    # -------------------------------------------------------------------------

    def apply_repayment(self, member_id, amount):
        """
        Add a repayment to the member's oldest active loan.

        Exactly one loan is updated; the amount is never split. The loan
        completes once total_repaid reaches its amount.

        Returns:
            Loan or None when the member has no active loan
        """
        loan = select_repayment_target(self.store.loans.filter_by(member_id=member_id, status='active'))
        if loan is None:
            logger.info(f"Repayment of {format_money(amount)} by member #{member_id}: no active loan")
            return None

        updated = self.store.loans.update(loan.id, total_repaid=loan.total_repaid + amount)
        if updated.is_fully_repaid:
            updated = self.store.loans.update(loan.id, status='completed')

        logger.info(
            f"Applied repayment {format_money(amount)} to loan #{loan.id}: "
            f"repaid {updated.total_repaid} of {updated.amount}, outstanding {updated.outstanding_balance}"
        )

        if updated.status != loan.status:
            self.store.on_commit(
                lambda: loan_status_changed.send(sender=Loan, loan=updated, previous_status=loan.status)
            )
        return updated

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_loan(self, loan_id):
        return self.store.loans.get(loan_id)

    def require_loan(self, loan_id):
        loan = self.get_loan(loan_id)
        if loan is None:
            raise NotFound('Loan', loan_id)
        return loan

    def list_member_loans(self, member_id):
        return self.store.loans.filter_by(member_id=member_id)

    def list_loans_by_status(self, status):
        is_valid, message = validate_loan_status(status)
        if not is_valid:
            raise InvalidArgument(message)
        return self.store.loans.filter_by(status=status)

    def list_active_loans(self):
        """Loans that are approved or being repaid"""
        return self.store.loans.filter(lambda loan: loan.status in ('active', 'approved'))
