# core/stats.py
"""
Dashboard statistics combining the member, savings and loan summaries
"""

import logging

from .store import get_store

logger = logging.getLogger(__name__)


def get_dashboard_summary(store=None, recent_limit=None):
    """
    Everything the dashboard landing page shows in one call.

    Returns:
        dict: member_stats, savings_stats, loan_stats, latest_dividend,
            pending_tasks, overdue_tasks, recent_transactions
    """
    from members.stats import get_member_stats
    from savings.stats import get_savings_stats
    from loans.stats import get_loan_stats
    from savings.services import TransactionService
    from dividends.services import DividendService
    from .services import TaskService

    store = store or get_store()
    pending_tasks = TaskService(store).list_pending_tasks()

    return {
        'member_stats': get_member_stats(store),
        'savings_stats': get_savings_stats(store),
        'loan_stats': get_loan_stats(store),
        'latest_dividend': DividendService(store).get_latest_dividend(),
        'pending_tasks': len(pending_tasks),
        'overdue_tasks': sum(1 for task in pending_tasks if task.is_overdue),
        'recent_transactions': TransactionService(store).get_recent_transactions(recent_limit),
    }
