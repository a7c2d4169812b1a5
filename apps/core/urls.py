# core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('dashboard', views.dashboard, name='dashboard'),

    # Tasks
    path('tasks', views.task_create, name='task_create'),
    path('tasks/pending', views.pending_tasks, name='pending_tasks'),
    path('tasks/type/<str:task_type>', views.tasks_by_type, name='tasks_by_type'),
    path('tasks/assignee/<int:user_id>', views.tasks_by_assignee, name='tasks_by_assignee'),
    path('tasks/<int:pk>', views.task_detail, name='task_detail'),
]
