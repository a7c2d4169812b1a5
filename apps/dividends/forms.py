# dividends/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import MoneyField, validate_positive_amount
from .models import DividendDistribution

logger = logging.getLogger(__name__)


class DividendForm(forms.Form):
    """Dividend period payload"""

    year = forms.IntegerField(label=_('Year'), min_value=1900, max_value=9999)
    month = forms.IntegerField(label=_('Month'), min_value=1, max_value=12)
    total_amount = MoneyField(label=_('Total Amount'), validators=[validate_positive_amount])
    distribution_date = forms.DateTimeField(label=_('Distribution Date'))
    description = forms.CharField(label=_('Description'), max_length=500, required=False)


class DividendDistributionForm(forms.Form):
    """Per-member distribution payload"""

    dividend_id = forms.IntegerField(label=_('Dividend'), min_value=1)
    member_id = forms.IntegerField(label=_('Member'), min_value=1)
    amount = MoneyField(label=_('Amount'), validators=[validate_positive_amount])
    distribution_date = forms.DateTimeField(label=_('Distribution Date'), required=False)
    status = forms.ChoiceField(label=_('Status'), choices=DividendDistribution.STATUS_CHOICES, required=False)
