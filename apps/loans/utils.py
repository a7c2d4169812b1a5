# loans/utils.py

"""
Loans Utility Functions

Pure utility functions with NO side effects (no store writes):
- EMI/installment calculation
- Loan term validation
- Status transition rules
- Repayment target selection
- Date utilities

Store writes are handled by services.py.
"""

from decimal import Decimal, ROUND_HALF_UP
from dateutil.relativedelta import relativedelta
import logging
import math

from utils.models import choice_values
from .models import Loan

logger = logging.getLogger(__name__)


# Allowed status changes; rejected, completed and defaulted are terminal
LOAN_STATUS_TRANSITIONS = {
    'pending': ('approved', 'rejected'),
    'approved': ('active',),
    'active': ('completed', 'defaulted'),
    'rejected': (),
    'completed': (),
    'defaulted': (),
}

# Loans created in these statuses are paid out immediately
DISBURSED_ON_CREATION = ('approved', 'active')


# =============================================================================
# INSTALLMENT CALCULATIONS
# =============================================================================

def calculate_monthly_payment(principal, rate, term_months):
    """
    Calculate Equal Monthly Installment (EMI) for an amortised loan.

    Formula: EMI = P × r × (1 + r)^n / ((1 + r)^n - 1)
    Where:
        P = Principal
        r = Monthly interest rate (annual rate / 12 / 100)
        n = Number of months

    Args:
        principal (Decimal): Loan principal amount
        rate (Decimal): Annual interest rate (percentage)
        term_months (int): Loan term in months

    Returns:
        Decimal: Monthly installment

    Example:
        >>> calculate_monthly_payment(Decimal('100000'), Decimal('12'), 12)
        Decimal('8884.88')
    """
    try:
        p = float(principal)
        r = float(rate) / 100 / 12
        n = int(term_months)

        if p <= 0 or r < 0 or n <= 0:
            logger.warning("Invalid values in EMI calculation")
            return Decimal('0.00')

        # Handle zero interest rate
        if r == 0:
            emi = p / n
        else:
            emi = p * r * math.pow(1 + r, n) / (math.pow(1 + r, n) - 1)

        return Decimal(str(emi)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (ValueError, TypeError, ZeroDivisionError, OverflowError) as e:
        logger.error(f"Error calculating EMI: {e}")
        return Decimal('0.00')


# =============================================================================
# VALIDATION
# =============================================================================

def validate_loan_terms(amount, interest_rate, term):
    """
    Validate the financial terms of a loan.

    Returns:
        tuple: (is_valid, message)
    """
    if amount <= 0:
        return False, "Loan amount must be greater than zero"

    if interest_rate < 0:
        return False, "Interest rate cannot be negative"

    try:
        term_months = int(term)
    except (TypeError, ValueError):
        return False, "Loan term must be a whole number of months"

    if term_months != term or term_months < 1:
        return False, "Loan term must be a whole number of months, at least 1"

    return True, "Valid"


def validate_loan_status(status):
    if status not in choice_values(Loan.STATUS_CHOICES):
        return False, f"Unknown loan status: {status}"
    return True, "Valid"


def can_transition_loan(current_status, new_status):
    """
    Check a status change against the loan lifecycle.

    Returns:
        tuple: (is_allowed, message)
    """
    is_valid, message = validate_loan_status(new_status)
    if not is_valid:
        return False, message

    if current_status == new_status:
        return True, "Unchanged"

    if new_status not in LOAN_STATUS_TRANSITIONS.get(current_status, ()):
        return False, f"Loan cannot move from {current_status} to {new_status}"

    return True, "Allowed"


# =============================================================================
# REPAYMENT ALLOCATION
# =============================================================================

def select_repayment_target(loans):
    """
    Oldest active loan by application date; lower id wins a tie.

    Returns:
        Loan or None
    """
    active = [loan for loan in loans if loan.status == 'active']
    if not active:
        return None
    return min(active, key=lambda loan: (loan.application_date, loan.id))


# =============================================================================
# DATE UTILITIES
# =============================================================================

def calculate_next_payment_date(current_date):
    """Next monthly installment date"""
    return current_date + relativedelta(months=1)
