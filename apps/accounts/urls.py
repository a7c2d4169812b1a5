# accounts/urls.py

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('register', views.register, name='register'),
    path('users/<int:pk>', views.user_detail, name='user_detail'),
]
