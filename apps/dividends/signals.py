# dividends/signals.py

"""
Dividends Signals

Audit logging for dividend distributions.
"""

from django.dispatch import receiver
import logging

from core.signals import dividend_distributed
from core.utils import format_money
from .models import DividendDistribution

logger = logging.getLogger(__name__)


@receiver(dividend_distributed, sender=DividendDistribution)
def log_distribution(sender, distribution, **kwargs):
    """Log dividend shares"""
    logger.info(
        f"Dividend #{distribution.dividend_id} share for member #{distribution.member_id}: "
        f"{format_money(distribution.amount)} ({distribution.status})"
    )
