# members/urls.py

from django.urls import path
from . import views

app_name = 'members'

urlpatterns = [
    path('members', views.member_list, name='member_list'),
    path('members/stats', views.member_stats, name='member_stats'),
    path('members/<int:pk>', views.member_detail, name='member_detail'),
]
