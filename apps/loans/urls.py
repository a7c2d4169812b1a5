# loans/urls.py

from django.urls import path
from . import views

app_name = 'loans'

urlpatterns = [
    path('loans', views.loan_list, name='loan_list'),
    path('loans/stats', views.loan_stats, name='loan_stats'),
    path('loans/member/<int:member_id>', views.member_loans, name='member_loans'),
    path('loans/<int:pk>', views.loan_detail, name='loan_detail'),
]
