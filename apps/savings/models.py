# savings/models.py

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import logging

from utils.models import BaseRecord

logger = logging.getLogger(__name__)


# =============================================================================
# TRANSACTION MODEL
# =============================================================================

@dataclass(kw_only=True)
class Transaction(BaseRecord):
    """Append-only money movement for a member. Amount is stored positive."""

    TRANSACTION_TYPES = [
        ('deposit', _('Deposit')),
        ('withdrawal', _('Withdrawal')),
        ('loan_disbursement', _('Loan Disbursement')),
        ('loan_repayment', _('Loan Repayment')),
        ('dividend_payment', _('Dividend Payment')),
    ]

    STATUS_CHOICES = [
        ('completed', _('Completed')),
        ('pending', _('Pending')),
        ('cancelled', _('Cancelled')),
        ('failed', _('Failed')),
    ]

    member_id: int
    type: str
    amount: Decimal
    date: datetime = field(default_factory=timezone.now)
    description: Optional[str] = None
    status: str = 'pending'

    @property
    def is_completed(self):
        return self.status == 'completed'

    def __str__(self):
        return f"{self.type} #{self.id} - {self.amount}"


# =============================================================================
# SAVINGS ACCOUNT MODEL
# =============================================================================

@dataclass(kw_only=True)
class Saving(BaseRecord):
    """Running savings balance of one member"""

    member_id: int
    total_savings: Decimal = Decimal('0.00')
    last_update: datetime = field(default_factory=timezone.now)

    def __str__(self):
        return f"Savings of member #{self.member_id}: {self.total_savings}"
