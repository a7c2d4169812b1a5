# accounts/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import PartialUpdateMixin
from .models import User

logger = logging.getLogger(__name__)


class UserForm(forms.Form):
    """Registration payload"""

    username = forms.CharField(label=_('Username'), max_length=150)
    password = forms.CharField(label=_('Password'), min_length=6, strip=False)
    full_name = forms.CharField(label=_('Full Name'), max_length=200)
    email = forms.EmailField(label=_('Email'))
    role = forms.ChoiceField(label=_('Role'), choices=User.ROLE_CHOICES, required=False)
    avatar = forms.CharField(label=_('Avatar'), max_length=500, required=False)


class UserUpdateForm(PartialUpdateMixin, UserForm):
    """Profile/password update payload"""
