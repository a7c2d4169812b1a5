# members/stats.py
"""
Member statistics, recomputed from the store on every call
"""

import logging

from core.store import get_store

logger = logging.getLogger(__name__)


# =============================================================================
# MEMBER STATISTICS
# =============================================================================

def get_member_stats(store=None):
    """
    Count members by status.

    Returns:
        dict: total, active, inactive, new, on_leave
    """
    store = store or get_store()
    members = store.members.all()

    stats = {
        'total': len(members),
        'active': 0,
        'inactive': 0,
        'new': 0,
        'on_leave': 0,
    }
    for member in members:
        if member.status in stats:
            stats[member.status] += 1

    return stats
