# core/signals.py

"""
Cooperative Signals

Sent after the unit of work that produced them has committed:
- member_created: a member and its savings account were opened
- transaction_recorded: a transaction and its cascade steps were stored
- loan_status_changed: a loan moved to a new status
- dividend_distributed: a member's dividend share was recorded

Receivers live in each app's signals.py and are registered in AppConfig.ready().
"""

from django.dispatch import Signal

# kwargs: member, saving
member_created = Signal()

# kwargs: transaction
transaction_recorded = Signal()

# kwargs: loan, previous_status
loan_status_changed = Signal()

# kwargs: distribution
dividend_distributed = Signal()
