# loans/stats.py
"""
Loan statistics, recomputed from the store on every call
"""

from decimal import Decimal
import logging

from core.store import get_store
from core.utils import get_recent_months, month_key

logger = logging.getLogger(__name__)

STATS_MONTHS = 6

# Loans that count as lent money in the monthly series
DISBURSED_STATUSES = ('active', 'completed')


# =============================================================================
# LOAN STATISTICS
# =============================================================================

def get_loan_stats(store=None, now=None):
    """
    Loan portfolio summary.

    Returns:
        dict: {
            'total_loans': int,           # every loan
            'active_loans': Decimal,      # sum of amounts of active loans
            'pending_loans': int,         # count of pending applications
            'monthly_loans': [{'month', 'year', 'amount'}, ...]  # 6 entries, current month first
        }
    """
    store = store or get_store()
    loans = store.loans.all()

    active_amount = sum(
        (loan.amount for loan in loans if loan.status == 'active'),
        Decimal('0.00'),
    )
    pending_count = sum(1 for loan in loans if loan.status == 'pending')

    lent_by_month = {}
    for loan in loans:
        if loan.status not in DISBURSED_STATUSES:
            continue
        key = month_key(loan.application_date)
        lent_by_month[key] = lent_by_month.get(key, Decimal('0.00')) + loan.amount

    monthly_loans = [
        {
            'month': month,
            'year': year,
            'amount': lent_by_month.get((year, month), Decimal('0.00')),
        }
        for year, month in get_recent_months(STATS_MONTHS, now=now)
    ]

    return {
        'total_loans': len(loans),
        'active_loans': active_amount,
        'pending_loans': pending_count,
        'monthly_loans': monthly_loans,
    }
