# dividends/utils.py

"""
Dividends Utility Functions

Pure utility functions with NO side effects (no store writes):
- Pro-rata share calculation
- Allocation validation
- Dividend period validation

Store writes are handled by services.py.
"""

from decimal import Decimal, ROUND_DOWN
import logging

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


# =============================================================================
# DIVIDEND CALCULATIONS
# =============================================================================

def calculate_pro_rata_shares(total_dividend_pool, balances):
    """
    Split a dividend pool in proportion to member balances.

    Each share is rounded down to the cent; the remainder goes to the
    largest balance (lowest member id on a tie) so the shares add up to
    the pool exactly.

    Args:
        total_dividend_pool (Decimal): Amount to distribute
        balances (list): [(member_id, balance), ...] with positive balances

    Returns:
        dict: {member_id: Decimal share}, in the order of ``balances``

    Example:
        >>> calculate_pro_rata_shares(Decimal('100'), [(1, Decimal('300')), (2, Decimal('100'))])
        {1: Decimal('75.00'), 2: Decimal('25.00')}
    """
    if not balances:
        return {}

    pool = sum(balance for _member_id, balance in balances)
    shares = {
        member_id: (total_dividend_pool * balance / pool).quantize(CENT, rounding=ROUND_DOWN)
        for member_id, balance in balances
    }

    largest = max(balances, key=lambda item: (item[1], -item[0]))[0]
    shares[largest] += total_dividend_pool - sum(shares.values())
    return shares


# =============================================================================
# VALIDATION
# =============================================================================

def validate_dividend_period(year, month):
    """
    Returns:
        tuple: (is_valid, message)
    """
    if not isinstance(year, int) or not isinstance(month, int) or isinstance(month, bool):
        return False, "Year and month must be whole numbers"
    if not 1 <= month <= 12:
        return False, "Month must be between 1 and 12"
    return True, "Valid"


def validate_total_dividend_allocation(allocated_total, total_dividend_pool):
    """
    Validate that allocated shares don't exceed the dividend pool.

    Returns:
        tuple: (is_valid, difference, message)
    """
    difference = total_dividend_pool - allocated_total

    if allocated_total > total_dividend_pool:
        return False, difference, f"Over-allocated by {abs(difference)}"

    if difference >= CENT:
        return True, difference, f"Under-allocated by {difference}"

    return True, difference, "Allocation is valid"
