# dividends/services.py

"""
Dividends Business Logic Services

- Dividend period creation and lookups
- Per-member distributions; a completed distribution is paid into savings
  through a dividend_payment transaction (CASCADE_STEPS)
- Pro-rata distribution of a dividend across active savers
"""

from django.utils import timezone
import logging

from core.exceptions import NotFound, InvalidArgument
from core.signals import dividend_distributed
from core.store import get_store
from core.utils import ensure_aware, format_money, to_decimal
from utils.models import choice_values
from .models import Dividend, DividendDistribution
from .utils import (
    calculate_pro_rata_shares,
    validate_dividend_period,
    validate_total_dividend_allocation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DIVIDEND SERVICES
# =============================================================================

class DividendService:
    """Handle dividends and their distribution to members"""

    CASCADE_STEPS = (
        'pay_to_savings',
    )

    def __init__(self, store=None):
        self.store = store or get_store()

    def create_dividend(self, year, month, total_amount, distribution_date, description=None):
        """
        Record a dividend for a period.

        Raises:
            InvalidArgument: month outside 1-12 or total <= 0
        """
        total_amount = to_decimal(total_amount, 'total_amount')
        is_valid, message = validate_dividend_period(year, month)
        if not is_valid:
            raise InvalidArgument(message)
        if total_amount <= 0:
            raise InvalidArgument('Dividend total must be greater than zero')
        if distribution_date is None:
            raise InvalidArgument('Distribution date is required')

        with self.store.atomic():
            dividend = self.store.dividends.create(Dividend(
                year=year,
                month=month,
                total_amount=total_amount,
                distribution_date=ensure_aware(distribution_date),
                description=description,
            ))

        logger.info(f"Created dividend #{dividend.id} for {dividend.period_label}: {format_money(total_amount)}")
        return dividend

    def get_dividend(self, dividend_id):
        return self.store.dividends.get(dividend_id)

    def require_dividend(self, dividend_id):
        dividend = self.get_dividend(dividend_id)
        if dividend is None:
            raise NotFound('Dividend', dividend_id)
        return dividend

    def list_dividends(self):
        return self.store.dividends.all()

    def get_latest_dividend(self):
        """Dividend with the latest distribution date, or None"""
        dividends = self.store.dividends.all()
        if not dividends:
            return None
        return max(dividends, key=lambda dividend: (dividend.distribution_date, dividend.id))

    # -------------------------------------------------------------------------
    # Distributions
    # -------------------------------------------------------------------------

    def create_distribution(self, dividend_id, member_id, amount, distribution_date=None, status='pending'):
        """
        Record a member's share and run the distribution cascade.

        Raises:
            NotFound: dividend or member does not exist
            InvalidArgument: amount <= 0 or unknown status
        """
        amount = to_decimal(amount)
        if amount <= 0:
            raise InvalidArgument('Amount must be greater than zero')
        if status not in choice_values(DividendDistribution.STATUS_CHOICES):
            raise InvalidArgument(f"Unknown distribution status: {status}")

        with self.store.atomic():
            self.require_dividend(dividend_id)
            if self.store.members.get(member_id) is None:
                raise NotFound('Member', member_id)

            distribution = self.store.dividend_distributions.create(DividendDistribution(
                dividend_id=dividend_id,
                member_id=member_id,
                amount=amount,
                distribution_date=ensure_aware(distribution_date) or timezone.now(),
                status=status,
            ))

            for step in self.CASCADE_STEPS:
                getattr(self, step)(distribution)

            self.store.on_commit(
                lambda: dividend_distributed.send(sender=DividendDistribution, distribution=distribution)
            )

        return distribution

    def pay_to_savings(self, distribution):
        """A completed distribution becomes a completed dividend_payment"""
        if distribution.status != 'completed':
            return None

        from savings.services import TransactionService

        return TransactionService(self.store).record_transaction(
            distribution.member_id,
            'dividend_payment',
            distribution.amount,
            date=distribution.distribution_date,
            description=f"Dividend payment for dividend #{distribution.dividend_id}",
            status='completed',
        )

    def distribute_pro_rata(self, dividend_id, status='pending', distribution_date=None):
        """
        Split a dividend across active members in proportion to their savings.

        Shares are rounded down to cents; the remainder goes to the largest
        saver so the shares add up to the dividend total.

        Returns:
            list: created DividendDistribution records

        Raises:
            NotFound: dividend does not exist
            InvalidArgument: no active member has a positive balance
        """
        with self.store.atomic():
            dividend = self.require_dividend(dividend_id)

            balances = []
            for member in self.store.members.filter(lambda member: member.is_active):
                saving = self.store.savings.first(member_id=member.id)
                if saving is not None and saving.total_savings > 0:
                    balances.append((member.id, saving.total_savings))

            if not balances:
                raise InvalidArgument('No eligible members: no active member has positive savings')

            shares = calculate_pro_rata_shares(dividend.total_amount, balances)
            is_valid, _difference, message = validate_total_dividend_allocation(
                sum(shares.values()), dividend.total_amount
            )
            if not is_valid:
                raise InvalidArgument(message)

            distributions = [
                self.create_distribution(
                    dividend.id, member_id, share,
                    distribution_date=distribution_date or dividend.distribution_date,
                    status=status,
                )
                for member_id, share in shares.items()
                if share > 0
            ]

        logger.info(
            f"Distributed dividend #{dividend.id} pro rata to {len(distributions)} member(s): "
            f"{format_money(dividend.total_amount)}"
        )
        return distributions

    def list_distributions_for_dividend(self, dividend_id):
        return self.store.dividend_distributions.filter_by(dividend_id=dividend_id)

    def list_distributions_for_member(self, member_id):
        return self.store.dividend_distributions.filter_by(member_id=member_id)
