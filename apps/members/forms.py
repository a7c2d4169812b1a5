# members/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import MoneyField, PartialUpdateMixin
from .models import Member

logger = logging.getLogger(__name__)


class MemberProfileForm(forms.Form):
    """Fields shared by member creation and updates"""

    employee_id = forms.CharField(label=_('Employee ID'), max_length=50)
    department = forms.CharField(label=_('Department'), max_length=100)
    position = forms.CharField(label=_('Position'), max_length=100)
    join_date = forms.DateTimeField(label=_('Join Date'), required=False)
    phone_number = forms.CharField(label=_('Phone Number'), max_length=30, required=False)
    address = forms.CharField(label=_('Address'), max_length=500, required=False)
    status = forms.ChoiceField(label=_('Status'), choices=Member.STATUS_CHOICES, required=False)
    monthly_contribution = MoneyField(label=_('Monthly Contribution'), required=False)


class MemberForm(MemberProfileForm):
    """Member creation payload"""

    user_id = forms.IntegerField(label=_('User'), min_value=1)


class MemberUpdateForm(PartialUpdateMixin, MemberProfileForm):
    """Partial member update payload"""
