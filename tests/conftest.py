"""
Shared fixtures: every test starts from an empty cooperative store.
"""

from decimal import Decimal
import itertools

import pytest

from core.store import reset_store
from accounts.services import UserService
from members.services import MemberService
from savings.services import TransactionService
from loans.services import LoanService


_sequence = itertools.count(1)


@pytest.fixture(autouse=True)
def store():
    return reset_store()


@pytest.fixture
def make_member(store):
    """Factory: user + member (active by default) with an opened savings account"""
    def _make_member(status='active', **overrides):
        n = next(_sequence)
        user = UserService(store).register_user(
            f"user{n}", 'secret123', f"Member {n}", f"user{n}@example.com"
        )
        fields = dict(
            user_id=user.id,
            employee_id=f"EMP-{n:04d}",
            department='Finance',
            position='Clerk',
            status=status,
        )
        fields.update(overrides)
        return MemberService(store).create_member(**fields)
    return _make_member


@pytest.fixture
def member(make_member):
    return make_member()


@pytest.fixture
def deposit(store):
    """Factory: record a completed deposit"""
    def _deposit(member_id, amount, **kwargs):
        kwargs.setdefault('status', 'completed')
        return TransactionService(store).record_transaction(member_id, 'deposit', Decimal(amount), **kwargs)
    return _deposit


@pytest.fixture
def make_loan(store):
    """Factory: loan of 1,000,000 at 12% over 12 months (pending by default)"""
    def _make_loan(member_id, amount='1000000', **kwargs):
        kwargs.setdefault('interest_rate', Decimal('12'))
        kwargs.setdefault('term', 12)
        kwargs.setdefault('purpose', 'Working capital')
        return LoanService(store).create_loan(member_id, Decimal(amount), **kwargs)
    return _make_loan


@pytest.fixture
def balance(store):
    """Current savings balance of a member"""
    return lambda member_id: store.savings.first(member_id=member_id).total_savings
