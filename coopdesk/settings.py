# coopdesk/settings.py

"""
Django settings for the coopdesk project.

The cooperative ledger keeps every record in process memory (see core/store.py),
so no database is configured. Runtime options are read from the environment.
"""

import os
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

# Apps are imported by their bare names (members, savings, loans, ...)
APPS_DIR = BASE_DIR / 'apps'
if str(APPS_DIR) not in sys.path:
    sys.path.insert(0, str(APPS_DIR))


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# =============================================================================
# CORE
# =============================================================================

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-coopdesk-development-key')

DEBUG = env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')
    if host.strip()
]

INSTALLED_APPS = [
    'core.apps.CoreConfig',
    'accounts.apps.AccountsConfig',
    'members.apps.MembersConfig',
    'savings.apps.SavingsConfig',
    'loans.apps.LoansConfig',
    'dividends.apps.DividendsConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'coopdesk.urls'

WSGI_APPLICATION = 'coopdesk.wsgi.application'

APPEND_SLASH = False

# Records live in core.store, not in a database
DATABASES = {}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.PBKDF2PasswordHasher',
    'django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher',
]


# =============================================================================
# INTERNATIONALIZATION
# =============================================================================

LANGUAGE_CODE = 'en-us'

TIME_ZONE = os.environ.get('COOP_TIME_ZONE', 'UTC')

USE_I18N = True

USE_TZ = True


# =============================================================================
# COOPERATIVE SETTINGS
# =============================================================================

COOP_CURRENCY = os.environ.get('COOP_CURRENCY', 'Rp')

# Days an auto-generated loan approval task has before it is due
COOP_LOAN_APPROVAL_DUE_DAYS = int(os.environ.get('COOP_LOAN_APPROVAL_DUE_DAYS', '3'))

COOP_RECENT_TRANSACTIONS_LIMIT = int(os.environ.get('COOP_RECENT_TRANSACTIONS_LIMIT', '10'))

# When False, completed withdrawals larger than the savings balance are rejected
COOP_ALLOW_NEGATIVE_SAVINGS = env_bool('COOP_ALLOW_NEGATIVE_SAVINGS', True)

# Populate the in-memory store with demo records on startup
COOP_SEED_DEMO_DATA = env_bool('COOP_SEED_DEMO_DATA', False)


# =============================================================================
# LOGGING
# =============================================================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} [{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': os.environ.get('COOP_LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
