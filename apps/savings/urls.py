# savings/urls.py

from django.urls import path
from . import views

app_name = 'savings'

urlpatterns = [
    # Transactions
    path('transactions', views.transaction_list, name='transaction_list'),
    path('transactions/<int:pk>', views.transaction_detail, name='transaction_detail'),
    path('transactions/member/<int:member_id>', views.member_transactions, name='member_transactions'),

    # Savings accounts
    path('savings', views.savings_list, name='savings_list'),
    path('savings/stats', views.savings_stats, name='savings_stats'),
    path('savings/member/<int:member_id>', views.member_savings, name='member_savings'),
]
