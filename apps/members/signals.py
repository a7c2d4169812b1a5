# members/signals.py

"""
Members Signals

Audit logging for member lifecycle events.
"""

from django.dispatch import receiver
import logging

from core.signals import member_created
from .models import Member

logger = logging.getLogger(__name__)


@receiver(member_created, sender=Member)
def log_member_creation(sender, member, saving, **kwargs):
    """Log when a new member joins"""
    logger.info(
        f"New member created: {member.employee_id} | "
        f"Department: {member.department} | "
        f"Status: {member.status} | "
        f"Savings account: #{saving.id}"
    )
