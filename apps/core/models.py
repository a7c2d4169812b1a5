# core/models.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import logging

from utils.models import BaseRecord

logger = logging.getLogger(__name__)


# =============================================================================
# TASK MODEL
# =============================================================================

@dataclass(kw_only=True)
class Task(BaseRecord):
    """Administrative work item, created manually or by the loan workflow"""

    STATUS_CHOICES = [
        ('pending', _('Pending')),
        ('in_progress', _('In Progress')),
        ('completed', _('Completed')),
    ]

    LOAN_APPROVAL = 'loan_approval'

    title: str
    type: str
    description: Optional[str] = None
    status: str = 'pending'
    assigned_to_user_id: Optional[int] = None
    created_at: datetime = field(default_factory=timezone.now)
    due_date: Optional[datetime] = None

    @property
    def is_overdue(self):
        return bool(self.due_date) and self.status != 'completed' and self.due_date < timezone.now()

    def __str__(self):
        return f"Task #{self.id}: {self.title}"
