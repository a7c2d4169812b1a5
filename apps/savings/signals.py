# savings/signals.py

"""
Savings Signals

Audit logging for recorded transactions.
"""

from django.dispatch import receiver
import logging

from core.signals import transaction_recorded
from core.utils import format_money
from .models import Transaction

logger = logging.getLogger(__name__)


@receiver(transaction_recorded, sender=Transaction)
def log_transaction(sender, transaction, **kwargs):
    """Log every committed transaction"""
    logger.info(
        f"Transaction recorded: #{transaction.id} | "
        f"Member: #{transaction.member_id} | "
        f"Type: {transaction.type} | "
        f"Amount: {format_money(transaction.amount)} | "
        f"Status: {transaction.status}"
    )
