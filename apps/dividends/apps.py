# dividends/apps.py

from django.apps import AppConfig


class DividendsConfig(AppConfig):
    name = "dividends"
    verbose_name = "Dividend Management"

    def ready(self):
        """
        Import signals when the app is ready.
        This ensures all signal handlers are registered.
        """
        import dividends.signals
