# dividends/models.py

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
# DIVIDEND MODEL
# =============================================================================

@dataclass(kw_only=True)
class Dividend(BaseRecord):
    """Cooperative-wide dividend for one period. Immutable once created."""

    year: int
    month: int
    total_amount: Decimal
    distribution_date: datetime
    description: Optional[str] = None

    @property
    def period_label(self):
        return f"{self.year}-{self.month:02d}"

    def __str__(self):
        return f"Dividend {self.period_label} - {self.total_amount}"


# =============================================================================
# DIVIDEND DISTRIBUTION MODEL
# =============================================================================

@dataclass(kw_only=True)
class DividendDistribution(BaseRecord):
    """A member's share of a dividend"""

    STATUS_CHOICES = [
        ('completed', _('Completed')),
        ('pending', _('Pending')),
        ('failed', _('Failed')),
    ]

    dividend_id: int
    member_id: int
    amount: Decimal
    distribution_date: datetime = field(default_factory=timezone.now)
    status: str = 'pending'

    def __str__(self):
        return f"Distribution #{self.id} of dividend #{self.dividend_id} to member #{self.member_id}"
