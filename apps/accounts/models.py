# accounts/models.py

from dataclasses import dataclass
from typing import Optional
from django.utils.translation import gettext_lazy as _
import logging

from utils.models import BaseRecord

logger = logging.getLogger(__name__)


# =============================================================================
# USER MODEL
# =============================================================================

@dataclass(kw_only=True)
class User(BaseRecord):
    """Login identity of an administrator or cooperative member"""

    ROLE_CHOICES = [
        ('admin', _('Administrator')),
        ('member', _('Member')),
    ]

    HIDDEN_FIELDS = ('password',)

    username: str
    password: str
    full_name: str
    email: str
    role: str = 'member'
    avatar: Optional[str] = None

    @property
    def is_admin(self):
        return self.role == 'admin'

    def __str__(self):
        return f"{self.full_name} ({self.username})"
