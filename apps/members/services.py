# members/services.py

"""
Members Business Logic Services

- Member registration (always together with a zero-balance savings account)
- Administrative status and profile updates
- Member lookups
"""

from django.utils import timezone
from decimal import Decimal
import logging

from core.exceptions import NotFound, InvalidArgument
from core.signals import member_created
from core.store import get_store
from core.utils import ensure_aware, to_decimal
from utils.models import choice_values
from .models import Member

logger = logging.getLogger(__name__)


class MemberService:
    """Handle member registration and maintenance"""

    IMMUTABLE_FIELDS = ('id', 'user_id')

    def __init__(self, store=None):
        self.store = store or get_store()

    def create_member(self, user_id, employee_id, department, position, join_date=None,
                      phone_number=None, address=None, status='new',
                      monthly_contribution=Decimal('0.00')):
        """
        Register a member and open its savings account.

        Raises:
            NotFound: user does not exist
            InvalidArgument: duplicate employee id, user already a member,
                unknown status or negative contribution
        """
        from savings.services import SavingsService

        employee_id = (employee_id or '').strip()
        if not employee_id:
            raise InvalidArgument('Employee ID is required')
        if status not in choice_values(Member.STATUS_CHOICES):
            raise InvalidArgument(f"Unknown member status: {status}")
        monthly_contribution = to_decimal(monthly_contribution, 'monthly_contribution')
        if monthly_contribution < 0:
            raise InvalidArgument('Monthly contribution cannot be negative')

        with self.store.atomic():
            if self.store.users.get(user_id) is None:
                raise NotFound('User', user_id)
            if self.get_member_by_employee_id(employee_id):
                raise InvalidArgument(f"Employee ID '{employee_id}' is already registered")
            if self.get_member_by_user_id(user_id):
                raise InvalidArgument(f"User #{user_id} is already a member")

            member = self.store.members.create(Member(
                user_id=user_id,
                employee_id=employee_id,
                department=department,
                position=position,
                join_date=ensure_aware(join_date) or timezone.now(),
                phone_number=phone_number,
                address=address,
                status=status,
                monthly_contribution=monthly_contribution,
            ))
            saving = SavingsService(self.store).open_account(member.id)

            self.store.on_commit(
                lambda: member_created.send(sender=Member, member=member, saving=saving)
            )

        return member

    def update_member(self, member_id, **changes):
        """
        Update profile or status fields of a member.

        Raises:
            NotFound: unknown member
            InvalidArgument: immutable field, unknown status, duplicate
                employee id or negative contribution
        """
        blocked = [name for name in self.IMMUTABLE_FIELDS if name in changes]
        if blocked:
            raise InvalidArgument(f"Member field(s) cannot be changed: {', '.join(blocked)}")
        if 'status' in changes and changes['status'] not in choice_values(Member.STATUS_CHOICES):
            raise InvalidArgument(f"Unknown member status: {changes['status']}")
        if 'monthly_contribution' in changes:
            changes['monthly_contribution'] = to_decimal(changes['monthly_contribution'], 'monthly_contribution')
            if changes['monthly_contribution'] < 0:
                raise InvalidArgument('Monthly contribution cannot be negative')
        if 'join_date' in changes:
            changes['join_date'] = ensure_aware(changes['join_date'])

        with self.store.atomic():
            member = self.require_member(member_id)

            employee_id = changes.get('employee_id')
            if employee_id and employee_id != member.employee_id:
                if self.get_member_by_employee_id(employee_id):
                    raise InvalidArgument(f"Employee ID '{employee_id}' is already registered")

            previous_status = member.status
            member = self.store.members.update(member_id, **changes)

        if member.status != previous_status:
            logger.info(f"Member #{member_id} status changed: {previous_status} -> {member.status}")
        return member

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_member(self, member_id):
        return self.store.members.get(member_id)

    def require_member(self, member_id):
        member = self.get_member(member_id)
        if member is None:
            raise NotFound('Member', member_id)
        return member

    def get_member_by_user_id(self, user_id):
        return self.store.members.first(user_id=user_id)

    def get_member_by_employee_id(self, employee_id):
        return self.store.members.first(employee_id=employee_id)

    def list_members(self):
        return self.store.members.all()

    def list_members_by_status(self, status):
        return self.store.members.filter_by(status=status)
