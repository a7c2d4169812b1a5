# loans/signals.py

"""
Loans Signals

Audit logging for loan status transitions.
"""

from django.dispatch import receiver
import logging

from core.signals import loan_status_changed
from .models import Loan

logger = logging.getLogger(__name__)


@receiver(loan_status_changed, sender=Loan)
def log_loan_status_change(sender, loan, previous_status, **kwargs):
    """Log loan status transitions"""
    if previous_status is None:
        logger.info(f"Loan #{loan.id} opened with status {loan.status}")
        return

    logger.info(f"Loan #{loan.id} status changed: {previous_status} -> {loan.status}")

    if loan.status == 'completed':
        logger.info(
            f"Loan #{loan.id} fully repaid: {loan.total_repaid} of {loan.amount} "
            f"(member #{loan.member_id})"
        )
    elif loan.status == 'defaulted':
        logger.warning(f"Loan #{loan.id} marked as defaulted (member #{loan.member_id})")
