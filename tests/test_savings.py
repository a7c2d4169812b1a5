"""
Tests for the transaction cascade: savings balance maintenance.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.exceptions import InvalidArgument, InvariantViolation, NotFound
from members.models import Member
from savings.services import TransactionService
from savings.utils import calculate_savings_balance, get_savings_delta


@pytest.fixture
def transactions(store):
    return TransactionService(store)


class TestSavingsCascade:
    def test_deposit_then_withdrawal(self, transactions, member, balance):
        transactions.record_transaction(member.id, 'deposit', Decimal('100000'), status='completed')
        assert balance(member.id) == Decimal('100000')

        transactions.record_transaction(member.id, 'withdrawal', Decimal('30000'), status='completed')
        assert balance(member.id) == Decimal('70000')

    def test_pending_deposit_leaves_balance(self, transactions, member, balance):
        txn = transactions.record_transaction(member.id, 'deposit', Decimal('50000'))
        assert txn.status == 'pending'
        assert balance(member.id) == Decimal('0')

    def test_disbursement_never_touches_savings(self, transactions, member, balance):
        transactions.record_transaction(member.id, 'loan_disbursement', Decimal('500000'), status='completed')
        assert balance(member.id) == Decimal('0')

    def test_dividend_payment_credits_savings(self, transactions, member, balance):
        transactions.record_transaction(member.id, 'dividend_payment', Decimal('1250.50'), status='completed')
        assert balance(member.id) == Decimal('1250.50')

    def test_last_update_moves_forward(self, store, transactions, member):
        before = store.savings.first(member_id=member.id).last_update
        transactions.record_transaction(member.id, 'deposit', Decimal('10'), status='completed')
        assert store.savings.first(member_id=member.id).last_update >= before

    def test_balance_matches_ledger(self, store, transactions, member, balance):
        for txn_type, amount, status in [
            ('deposit', '100000', 'completed'),
            ('deposit', '25000', 'pending'),
            ('withdrawal', '40000', 'completed'),
            ('loan_disbursement', '300000', 'completed'),
            ('dividend_payment', '1500', 'completed'),
            ('withdrawal', '5000', 'failed'),
        ]:
            transactions.record_transaction(member.id, txn_type, Decimal(amount), status=status)

        ledger = transactions.list_member_transactions(member.id)
        assert balance(member.id) == calculate_savings_balance(ledger) == Decimal('61500')

    def test_other_members_untouched(self, transactions, make_member, balance):
        first, second = make_member(), make_member()
        transactions.record_transaction(first.id, 'deposit', Decimal('1000'), status='completed')
        assert balance(second.id) == Decimal('0')


class TestOverdraft:
    def test_negative_balance_allowed_by_default(self, transactions, member, balance):
        transactions.record_transaction(member.id, 'withdrawal', Decimal('1000'), status='completed')
        assert balance(member.id) == Decimal('-1000')

    def test_policy_blocks_overdraft(self, settings, store, transactions, member, deposit, balance):
        settings.COOP_ALLOW_NEGATIVE_SAVINGS = False
        deposit(member.id, '500')
        with pytest.raises(InvalidArgument, match="Insufficient"):
            transactions.record_transaction(member.id, 'withdrawal', Decimal('501'), status='completed')
        assert balance(member.id) == Decimal('500')
        assert store.transactions.count() == 1


class TestValidation:
    @pytest.mark.parametrize('txn_type, amount, status', [
        ('transfer', '100', 'completed'),
        ('deposit', '0', 'completed'),
        ('deposit', '-5', 'completed'),
        ('deposit', '100', 'reversed'),
    ])
    def test_invalid_transactions_are_not_stored(self, store, transactions, member, txn_type, amount, status):
        with pytest.raises(InvalidArgument):
            transactions.record_transaction(member.id, txn_type, Decimal(amount), status=status)
        assert store.transactions.count() == 0

    def test_non_numeric_amount(self, transactions, member):
        with pytest.raises(InvalidArgument, match="number"):
            transactions.record_transaction(member.id, 'deposit', 'lots')

    def test_unknown_member(self, store, transactions):
        with pytest.raises(NotFound):
            transactions.record_transaction(404, 'deposit', Decimal('100'), status='completed')
        assert store.transactions.count() == 0

    def test_missing_savings_account_rolls_back(self, store, transactions):
        # Member inserted behind the service's back, so no account was opened
        orphan = store.members.create(Member(
            user_id=1, employee_id='EMP-X', department='Ops', position='Clerk',
        ))
        with pytest.raises(InvariantViolation):
            transactions.record_transaction(orphan.id, 'deposit', Decimal('100'), status='completed')
        assert store.transactions.count() == 0


class TestUpdateTransaction:
    def test_completing_applies_effect_once(self, transactions, member, balance):
        txn = transactions.record_transaction(member.id, 'deposit', Decimal('20000'))
        transactions.update_transaction(txn.id, status='completed')
        transactions.update_transaction(txn.id, status='completed', description='Verified')
        assert balance(member.id) == Decimal('20000')

    def test_completed_is_final(self, transactions, member):
        txn = transactions.record_transaction(member.id, 'deposit', Decimal('20000'), status='completed')
        with pytest.raises(InvalidArgument, match="cannot change"):
            transactions.update_transaction(txn.id, status='cancelled')

    def test_only_description_and_status_editable(self, transactions, member):
        txn = transactions.record_transaction(member.id, 'deposit', Decimal('20000'))
        with pytest.raises(InvalidArgument):
            transactions.update_transaction(txn.id, amount=Decimal('1'))

    def test_cancelled_pending_has_no_effect(self, transactions, member, balance):
        txn = transactions.record_transaction(member.id, 'withdrawal', Decimal('20000'))
        transactions.update_transaction(txn.id, status='cancelled')
        assert balance(member.id) == Decimal('0')

    def test_unknown_transaction(self, transactions):
        with pytest.raises(NotFound):
            transactions.update_transaction(3, status='completed')


class TestRecentTransactions:
    def test_most_recent_first_with_limit(self, transactions, member, deposit):
        for day in (3, 1, 2):
            deposit(member.id, '10', date=datetime(2026, 5, day, 12, tzinfo=timezone.utc))

        recent = transactions.get_recent_transactions(2)
        assert [txn.date.day for txn in recent] == [3, 2]

    def test_default_limit_from_settings(self, settings, transactions, member, deposit):
        settings.COOP_RECENT_TRANSACTIONS_LIMIT = 3
        for _ in range(5):
            deposit(member.id, '10')
        assert len(transactions.get_recent_transactions()) == 3

    def test_zero_limit(self, transactions, member, deposit):
        deposit(member.id, '10')
        assert transactions.get_recent_transactions(0) == []


class TestSavingsDelta:
    def test_delta_signs(self, transactions, member):
        withdrawal = transactions.record_transaction(member.id, 'withdrawal', Decimal('5'), status='completed')
        pending = transactions.record_transaction(member.id, 'deposit', Decimal('5'))
        assert get_savings_delta(withdrawal) == Decimal('-5')
        assert get_savings_delta(pending) == Decimal('0')
