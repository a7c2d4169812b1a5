# core/apps.py

from django.apps import AppConfig
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    name = "core"
    verbose_name = "Cooperative Core"

    def ready(self):
        """
        Import signals when the app is ready.
        Seeds the demo cooperative when COOP_SEED_DEMO_DATA is set.
        """
        import core.signals

        if getattr(settings, 'COOP_SEED_DEMO_DATA', False):
            from .services import seed_demo_data
            counts = seed_demo_data()
            logger.info(f"Seeded demo cooperative: {counts}")
