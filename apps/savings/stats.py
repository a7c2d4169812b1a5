# savings/stats.py
"""
Savings statistics, recomputed from the store on every call
"""

from decimal import Decimal
import logging

from core.store import get_store
from core.utils import get_recent_months, month_key

logger = logging.getLogger(__name__)

STATS_MONTHS = 6


# =============================================================================
# SAVINGS STATISTICS
# =============================================================================

def get_savings_stats(store=None, now=None):
    """
    Total savings and monthly deposit volume.

    Args:
        store: CooperativeStore (process-wide store by default)
        now: reference time for the current month (defaults to now)

    Returns:
        dict: {
            'total_savings': Decimal,
            'monthly_savings': [{'month', 'year', 'amount'}, ...]  # 6 entries, current month first
        }
    """
    store = store or get_store()

    total_savings = sum(
        (saving.total_savings for saving in store.savings.all()),
        Decimal('0.00'),
    )

    deposits_by_month = {}
    for txn in store.transactions.filter_by(type='deposit'):
        key = month_key(txn.date)
        deposits_by_month[key] = deposits_by_month.get(key, Decimal('0.00')) + txn.amount

    monthly_savings = [
        {
            'month': month,
            'year': year,
            'amount': deposits_by_month.get((year, month), Decimal('0.00')),
        }
        for year, month in get_recent_months(STATS_MONTHS, now=now)
    ]

    return {
        'total_savings': total_savings,
        'monthly_savings': monthly_savings,
    }
