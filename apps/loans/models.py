# loans/models.py

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
# LOAN MODEL
# =============================================================================

@dataclass(kw_only=True)
class Loan(BaseRecord):
    """
    Loan application and its repayment progress.

    Lifecycle:
        pending -> approved | rejected
        approved -> active
        active -> completed | defaulted
    """

    STATUS_CHOICES = [
        ('pending', _('Pending')),
        ('approved', _('Approved')),
        ('rejected', _('Rejected')),
        ('active', _('Active')),
        ('completed', _('Completed')),
        ('defaulted', _('Defaulted')),
    ]

    member_id: int
    amount: Decimal
    interest_rate: Decimal
    term: int
    purpose: str
    application_date: datetime = field(default_factory=timezone.now)
    approval_date: Optional[datetime] = None
    status: str = 'pending'
    total_repaid: Decimal = Decimal('0.00')
    next_payment_due: Optional[datetime] = None
    monthly_payment: Optional[Decimal] = None

    @property
    def outstanding_balance(self):
        return max(self.amount - self.total_repaid, Decimal('0.00'))

    @property
    def is_fully_repaid(self):
        return self.total_repaid >= self.amount

    def __str__(self):
        return f"Loan #{self.id} - {self.amount} ({self.status})"
