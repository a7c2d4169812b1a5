# members/models.py

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
# MEMBER MODEL
# =============================================================================

@dataclass(kw_only=True)
class Member(BaseRecord):
    """
    Cooperative participant.

    Linked one-to-one to a User and to exactly one Saving record, which is
    opened together with the member.
    """

    STATUS_CHOICES = [
        ('active', _('Active')),
        ('inactive', _('Inactive')),
        ('new', _('New')),
        ('on_leave', _('On Leave')),
    ]

    user_id: int
    employee_id: str
    department: str
    position: str
    join_date: datetime = field(default_factory=timezone.now)
    phone_number: Optional[str] = None
    address: Optional[str] = None
    status: str = 'new'
    monthly_contribution: Decimal = Decimal('0.00')

    @property
    def is_active(self):
        return self.status == 'active'

    def __str__(self):
        return f"Member #{self.id} ({self.employee_id})"
