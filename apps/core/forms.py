# core/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import PartialUpdateMixin
from .models import Task

logger = logging.getLogger(__name__)


class TaskForm(forms.Form):
    """Manual task payload"""

    title = forms.CharField(label=_('Title'), max_length=200)
    description = forms.CharField(label=_('Description'), max_length=1000, required=False)
    type = forms.CharField(label=_('Type'), max_length=50)
    status = forms.ChoiceField(label=_('Status'), choices=Task.STATUS_CHOICES, required=False)
    assigned_to_user_id = forms.IntegerField(label=_('Assigned To'), min_value=1, required=False)
    due_date = forms.DateTimeField(label=_('Due Date'), required=False)


class TaskUpdateForm(PartialUpdateMixin, TaskForm):
    """Workflow update payload"""
