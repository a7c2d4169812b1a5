# savings/utils.py

"""
Savings Utility Functions

Pure functions with NO side effects:
- Transaction validation
- Signed savings effect of a transaction
- Status transition checks for recorded transactions
"""

from decimal import Decimal
import logging

from utils.models import choice_values
from .models import Transaction

logger = logging.getLogger(__name__)


# Sign applied to a completed transaction's amount on the member's savings.
# loan_disbursement is deliberately absent: it never touches savings.
SAVINGS_EFFECT = {
    'deposit': 1,
    'loan_repayment': 1,
    'dividend_payment': 1,
    'withdrawal': -1,
}

EDITABLE_TRANSACTION_FIELDS = ('description', 'status')


# =============================================================================
# VALIDATION
# =============================================================================

def validate_transaction(transaction_type, amount, status):
    """
    Validate a transaction before it is stored.

    Returns:
        tuple: (is_valid, message)
    """
    if transaction_type not in choice_values(Transaction.TRANSACTION_TYPES):
        return False, f"Unknown transaction type: {transaction_type}"

    if status not in choice_values(Transaction.STATUS_CHOICES):
        return False, f"Unknown transaction status: {status}"

    if amount <= 0:
        return False, "Amount must be greater than zero"

    return True, "Valid"


def validate_withdrawal_balance(balance, amount):
    """
    Check a withdrawal against the current balance.

    Returns:
        tuple: (is_valid, message)
    """
    if amount > balance:
        return False, f"Insufficient savings: balance {balance}, requested {amount}"
    return True, "Valid"


def can_change_transaction_status(current_status, new_status):
    """
    Completed transactions are final; everything else may move to any status.

    Returns:
        tuple: (is_allowed, message)
    """
    if new_status not in choice_values(Transaction.STATUS_CHOICES):
        return False, f"Unknown transaction status: {new_status}"
    if current_status == 'completed' and new_status != 'completed':
        return False, "Completed transactions cannot change status"
    return True, "Allowed"


# =============================================================================
# BALANCE EFFECTS
# =============================================================================

def affects_savings(transaction):
    return transaction.type in SAVINGS_EFFECT


def get_savings_delta(transaction):
    """
    Signed effect of a completed transaction on savings.

    Returns:
        Decimal: +amount, -amount, or zero when savings are unaffected
    """
    if not transaction.is_completed or not affects_savings(transaction):
        return Decimal('0.00')
    return transaction.amount * SAVINGS_EFFECT[transaction.type]


def calculate_savings_balance(transactions):
    """Net savings effect of a sequence of transactions"""
    return sum((get_savings_delta(txn) for txn in transactions), Decimal('0.00'))
