"""
Tests for the statistics aggregators and the dashboard summary.
"""

from datetime import datetime, timezone
from decimal import Decimal

from core.services import TaskService
from core.stats import get_dashboard_summary
from core.utils import get_recent_months
from loans.stats import get_loan_stats
from savings.services import TransactionService
from savings.stats import get_savings_stats

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _on(year, month, day=15):
    return datetime(year, month, day, 12, 0, tzinfo=timezone.utc)


class TestRecentMonths:
    def test_six_months_current_first(self):
        assert get_recent_months(now=NOW) == [
            (2026, 3), (2026, 2), (2026, 1), (2025, 12), (2025, 11), (2025, 10),
        ]


class TestSavingsStats:
    def test_empty_store(self, store):
        stats = get_savings_stats(store, now=NOW)
        assert stats['total_savings'] == Decimal('0')
        assert len(stats['monthly_savings']) == 6
        assert all(entry['amount'] == 0 for entry in stats['monthly_savings'])

    def test_monthly_deposits(self, store, make_member, deposit):
        first, second = make_member(), make_member()
        deposit(first.id, '100000', date=_on(2026, 3, 2))
        deposit(second.id, '50000', date=_on(2026, 3, 20))
        deposit(first.id, '25000', date=_on(2026, 1))
        deposit(first.id, '999', date=_on(2025, 8))  # outside the window
        deposit(first.id, '5000', date=_on(2026, 2), status='pending')

        stats = get_savings_stats(store, now=NOW)
        monthly = stats['monthly_savings']

        assert monthly[0] == {'month': 3, 'year': 2026, 'amount': Decimal('150000')}
        assert monthly[1]['amount'] == Decimal('5000')
        assert monthly[2] == {'month': 1, 'year': 2026, 'amount': Decimal('25000')}
        assert monthly[5]['month'] == 10
        assert stats['total_savings'] == Decimal('175999')

    def test_withdrawals_not_counted_monthly(self, store, member, deposit):
        deposit(member.id, '1000', date=_on(2026, 3))
        TransactionService(store).record_transaction(
            member.id, 'withdrawal', Decimal('400'), date=_on(2026, 3), status='completed'
        )
        stats = get_savings_stats(store, now=NOW)
        assert stats['monthly_savings'][0]['amount'] == Decimal('1000')
        assert stats['total_savings'] == Decimal('600')


class TestLoanStats:
    def test_portfolio_summary(self, store, make_member, make_loan):
        member = make_member()
        make_loan(member.id, amount='1000000', status='active', application_date=_on(2026, 3))
        make_loan(member.id, amount='400000', status='completed', application_date=_on(2026, 2))
        make_loan(member.id, amount='300000', application_date=_on(2026, 3))
        make_loan(member.id, amount='200000', application_date=_on(2026, 3))
        make_loan(member.id, amount='700000', status='rejected', application_date=_on(2026, 3))

        stats = get_loan_stats(store, now=NOW)

        assert stats['total_loans'] == 5
        assert stats['active_loans'] == Decimal('1000000')
        assert stats['pending_loans'] == 2
        assert len(stats['monthly_loans']) == 6
        assert stats['monthly_loans'][0] == {'month': 3, 'year': 2026, 'amount': Decimal('1000000')}
        assert stats['monthly_loans'][1]['amount'] == Decimal('400000')

    def test_empty_store(self, store):
        stats = get_loan_stats(store, now=NOW)
        assert stats['total_loans'] == 0
        assert stats['active_loans'] == Decimal('0')
        assert stats['pending_loans'] == 0


class TestDashboard:
    def test_summary(self, store, member, deposit, make_loan):
        deposit(member.id, '1000')
        make_loan(member.id)

        summary = get_dashboard_summary(store)

        assert summary['member_stats']['total'] == 1
        assert summary['savings_stats']['total_savings'] == Decimal('1000')
        assert summary['loan_stats']['pending_loans'] == 1
        assert summary['pending_tasks'] == 1
        assert summary['latest_dividend'] is None
        assert len(summary['recent_transactions']) == 1

    def test_overdue_tasks(self, store):
        tasks = TaskService(store)
        tasks.create_task('Chase arrears', 'follow_up', due_date=datetime(2020, 1, 1, tzinfo=timezone.utc))
        tasks.create_task('Plan AGM', 'meeting', due_date=datetime(2999, 1, 1, tzinfo=timezone.utc))
        tasks.create_task('Late but done', 'audit', status='completed', due_date=datetime(2020, 1, 1, tzinfo=timezone.utc))

        summary = get_dashboard_summary(store)

        assert summary['pending_tasks'] == 2
        assert summary['overdue_tasks'] == 1
