# savings/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import MoneyField, PartialUpdateMixin, validate_positive_amount
from .models import Transaction

logger = logging.getLogger(__name__)


class TransactionForm(forms.Form):
    """Transaction recording payload"""

    member_id = forms.IntegerField(label=_('Member'), min_value=1)
    type = forms.ChoiceField(label=_('Transaction Type'), choices=Transaction.TRANSACTION_TYPES)
    amount = MoneyField(label=_('Amount'), validators=[validate_positive_amount])
    date = forms.DateTimeField(label=_('Date'), required=False)
    description = forms.CharField(label=_('Description'), max_length=500, required=False)
    status = forms.ChoiceField(label=_('Status'), choices=Transaction.STATUS_CHOICES, required=False)


class TransactionUpdateForm(PartialUpdateMixin, forms.Form):
    """Description/status change of a recorded transaction"""

    description = forms.CharField(label=_('Description'), max_length=500)
    status = forms.ChoiceField(label=_('Status'), choices=Transaction.STATUS_CHOICES)


class TransactionFilterForm(forms.Form):
    """Query string of the recent transactions listing"""

    limit = forms.IntegerField(min_value=0, required=False)
