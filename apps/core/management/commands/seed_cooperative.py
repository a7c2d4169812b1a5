# core/management/commands/seed_cooperative.py

"""
Seed the in-memory store with a demo cooperative.

The store lives in process memory, so this is mainly useful to check that
the cascades produce a consistent ledger from a clean start. To serve the
demo data, run the server with COOP_SEED_DEMO_DATA=true instead.

USAGE EXAMPLES:
===============

# Seed and print a summary
python manage.py seed_cooperative

# Start from an empty store first
python manage.py seed_cooperative --reset
"""

from django.core.management.base import BaseCommand, CommandError
import logging

from core.exceptions import InvalidArgument, NotFound, InvariantViolation
from core.services import seed_demo_data
from core.stats import get_dashboard_summary
from core.store import get_store, reset_store
from core.utils import format_money

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Seed the in-memory store with demo members, savings, loans and a dividend'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset',
            action='store_true',
            help='Clear the store before seeding'
        )

    def handle(self, *args, **options):
        store = reset_store() if options['reset'] else get_store()

        if any(repository.count() for repository in store.repositories.values()):
            raise CommandError(
                'The store already holds records (COOP_SEED_DEMO_DATA may have seeded it); '
                'run with --reset to start from an empty store'
            )

        self.stdout.write(self.style.SUCCESS('=' * 60))
        self.stdout.write(self.style.SUCCESS('COOPERATIVE DEMO DATA'))
        self.stdout.write(self.style.SUCCESS('=' * 60))

        try:
            counts = seed_demo_data(store)
        except (InvalidArgument, NotFound, InvariantViolation) as e:
            logger.error(f"Seeding failed: {e}")
            raise CommandError(f"Seeding failed: {e}")

        for name, count in counts.items():
            self.stdout.write(f"  {name:<24} {count}")

        summary = get_dashboard_summary(store)
        self.stdout.write(
            f"\nTotal savings: {format_money(summary['savings_stats']['total_savings'])}"
        )
        self.stdout.write(
            f"Active loans:  {format_money(summary['loan_stats']['active_loans'])}"
        )
        self.stdout.write(self.style.SUCCESS('\n✓ Demo cooperative seeded'))
