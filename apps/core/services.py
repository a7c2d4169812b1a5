# core/services.py

"""
Core Business Logic Services

- Administrative task workflow (manual and auto-generated tasks)
- Demo data seeding for development servers
"""

from django.utils import timezone
from dateutil.relativedelta import relativedelta
from decimal import Decimal
import logging

from utils.models import choice_values
from .exceptions import NotFound, InvalidArgument
from .models import Task
from .store import get_store
from .utils import ensure_aware

logger = logging.getLogger(__name__)


# =============================================================================
# TASK SERVICES
# =============================================================================

class TaskService:
    """Handle administrative tasks"""

    IMMUTABLE_FIELDS = ('id', 'created_at')

    def __init__(self, store=None):
        self.store = store or get_store()

    def create_task(self, title, task_type, description=None, status='pending',
                    assigned_to_user_id=None, created_at=None, due_date=None):
        """
        Create a task.

        Raises:
            InvalidArgument: empty title/type or unknown status
            NotFound: assignee is not a user
        """
        if not title:
            raise InvalidArgument('Task title is required')
        if not task_type:
            raise InvalidArgument('Task type is required')
        if status not in choice_values(Task.STATUS_CHOICES):
            raise InvalidArgument(f"Unknown task status: {status}")

        with self.store.atomic():
            if assigned_to_user_id is not None and self.store.users.get(assigned_to_user_id) is None:
                raise NotFound('User', assigned_to_user_id)

            task = self.store.tasks.create(Task(
                title=title,
                type=task_type,
                description=description,
                status=status,
                assigned_to_user_id=assigned_to_user_id,
                created_at=ensure_aware(created_at) or timezone.now(),
                due_date=ensure_aware(due_date),
            ))

        logger.info(f"Created task #{task.id} [{task.type}]: {task.title}")
        return task

    def update_task(self, task_id, **changes):
        """
        Apply workflow changes (status, assignee, due date, text).

        Raises:
            NotFound: unknown task or assignee
            InvalidArgument: immutable field or unknown status
        """
        blocked = [name for name in self.IMMUTABLE_FIELDS if name in changes]
        if blocked:
            raise InvalidArgument(f"Task field(s) cannot be changed: {', '.join(blocked)}")
        if 'status' in changes and changes['status'] not in choice_values(Task.STATUS_CHOICES):
            raise InvalidArgument(f"Unknown task status: {changes['status']}")
        if 'due_date' in changes:
            changes['due_date'] = ensure_aware(changes['due_date'])

        with self.store.atomic():
            task = self.store.tasks.get(task_id)
            if task is None:
                raise NotFound('Task', task_id)

            assignee = changes.get('assigned_to_user_id')
            if assignee is not None and self.store.users.get(assignee) is None:
                raise NotFound('User', assignee)

            task = self.store.tasks.update(task_id, **changes)

        logger.info(f"Updated task #{task_id}: status={task.status}")
        return task

    def get_task(self, task_id):
        return self.store.tasks.get(task_id)

    def list_pending_tasks(self):
        return self.store.tasks.filter_by(status='pending')

    def list_tasks_by_type(self, task_type):
        return self.store.tasks.filter_by(type=task_type)

    def list_tasks_by_assignee(self, user_id):
        return self.store.tasks.filter_by(assigned_to_user_id=user_id)


# =============================================================================
# DEMO DATA
# =============================================================================

DEMO_MEMBERS = [
    ('EMP-001', 'Siti Rahma', 'Finance', 'Accountant', 'active', Decimal('500000')),
    ('EMP-002', 'Budi Santoso', 'Operations', 'Supervisor', 'active', Decimal('750000')),
    ('EMP-003', 'Dewi Lestari', 'Human Resources', 'Officer', 'new', Decimal('250000')),
    ('EMP-004', 'Agus Wijaya', 'Logistics', 'Driver', 'on_leave', Decimal('300000')),
]


def seed_demo_data(store=None):
    """
    Populate the store with a small, consistent demo cooperative.

    Everything goes through the services so the cascades run as in production.

    Returns:
        dict: counts of created records
    """
    from accounts.services import UserService
    from members.services import MemberService
    from savings.services import TransactionService
    from loans.services import LoanService
    from dividends.services import DividendService

    store = store or get_store()
    users = UserService(store)
    members = MemberService(store)
    transactions = TransactionService(store)
    loans = LoanService(store)
    dividends = DividendService(store)

    now = timezone.now()

    with store.atomic():
        users.register_user('admin', 'admin123', 'Cooperative Administrator', 'admin@example.com', role='admin')

        created_members = []
        for employee_id, full_name, department, position, status, contribution in DEMO_MEMBERS:
            user = users.register_user(
                employee_id.lower(), 'defaultpassword', full_name, f"{employee_id.lower()}@example.com"
            )
            member = members.create_member(
                user_id=user.id,
                employee_id=employee_id,
                department=department,
                position=position,
                join_date=now - relativedelta(years=1),
                status=status,
                monthly_contribution=contribution,
            )
            created_members.append(member)

            for months_ago in range(5, -1, -1):
                transactions.record_transaction(
                    member.id, 'deposit', contribution,
                    date=now - relativedelta(months=months_ago),
                    description='Monthly contribution',
                    status='completed',
                )

        first, second = created_members[0], created_members[1]
        loans.create_loan(
            first.id, Decimal('5000000'), Decimal('5.5'), 12, 'Home renovation',
            status='active', application_date=now - relativedelta(months=3),
        )
        loans.create_loan(second.id, Decimal('2000000'), Decimal('6'), 6, 'School fees')
        transactions.record_transaction(
            first.id, 'loan_repayment', Decimal('450000'),
            description='Loan instalment', status='completed',
        )

        dividend = dividends.create_dividend(
            year=now.year, month=now.month, total_amount=Decimal('1000000'),
            distribution_date=now, description='Monthly surplus share',
        )
        dividends.distribute_pro_rata(dividend.id, status='completed')

    counts = {name: repo.count() for name, repo in store.repositories.items()}
    logger.info(f"Seeded demo cooperative: {counts}")
    return counts
