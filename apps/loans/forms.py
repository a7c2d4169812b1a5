# loans/forms.py

from django import forms
from django.utils.translation import gettext_lazy as _
import logging

from utils.forms import MoneyField, PercentageField, PartialUpdateMixin, validate_positive_amount
from .models import Loan

logger = logging.getLogger(__name__)


class LoanTermsForm(forms.Form):
    """Fields shared by loan applications and updates"""

    amount = MoneyField(label=_('Amount'), validators=[validate_positive_amount])
    interest_rate = PercentageField(label=_('Interest Rate (% p.a.)'))
    term = forms.IntegerField(label=_('Term (months)'), min_value=1)
    purpose = forms.CharField(label=_('Purpose'), max_length=500)
    status = forms.ChoiceField(label=_('Status'), choices=Loan.STATUS_CHOICES, required=False)
    application_date = forms.DateTimeField(label=_('Application Date'), required=False)
    approval_date = forms.DateTimeField(label=_('Approval Date'), required=False)
    next_payment_due = forms.DateTimeField(label=_('Next Payment Due'), required=False)
    monthly_payment = MoneyField(label=_('Monthly Payment'), required=False)


class LoanForm(LoanTermsForm):
    """Loan application payload"""

    member_id = forms.IntegerField(label=_('Member'), min_value=1)
    total_repaid = MoneyField(label=_('Total Repaid'), required=False)


class LoanUpdateForm(PartialUpdateMixin, LoanTermsForm):
    """Partial loan update payload (status workflow, dates, terms)"""


class LoanFilterForm(forms.Form):
    """Query string of the loan listing"""

    status = forms.ChoiceField(choices=Loan.STATUS_CHOICES, required=False)
