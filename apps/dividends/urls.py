# dividends/urls.py

from django.urls import path
from . import views

app_name = 'dividends'

urlpatterns = [
    path('dividends', views.dividend_list, name='dividend_list'),
    path('dividends/latest', views.latest_dividend, name='latest_dividend'),
    path('dividends/<int:pk>/distributions', views.dividend_distributions, name='dividend_distributions'),
    path('dividends/<int:pk>/distribute', views.distribute_dividend, name='distribute_dividend'),
    path('dividend-distributions', views.create_distribution, name='create_distribution'),
]
