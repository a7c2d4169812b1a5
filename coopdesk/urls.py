"""
URL configuration for the coopdesk project.

Every endpoint is a JSON API consumed by the dashboard SPA.
"""

from django.urls import path, include

urlpatterns = [
    # Core app: dashboard & tasks
    path('api/', include(('core.urls', 'core'), namespace='core')),

    # Accounts app: registration & profiles
    path('api/', include(('accounts.urls', 'accounts'), namespace='accounts')),

    # Members app
    path('api/', include(('members.urls', 'members'), namespace='members')),

    # Savings app: savings accounts & transactions
    path('api/', include(('savings.urls', 'savings'), namespace='savings')),

    # Loans app
    path('api/', include(('loans.urls', 'loans'), namespace='loans')),

    # Dividends app
    path('api/', include(('dividends.urls', 'dividends'), namespace='dividends')),
]
