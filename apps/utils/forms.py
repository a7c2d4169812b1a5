# utils/forms.py

"""
Shared form fields, validators and helpers for API payload validation
"""

from django import forms
from django.core.exceptions import ValidationError
from decimal import Decimal, InvalidOperation
import logging
import re

logger = logging.getLogger(__name__)


# =============================================================================
# CUSTOM FIELDS
# =============================================================================

class MoneyField(forms.DecimalField):
    """Custom field for money amounts with proper validation"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_digits', 15)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', Decimal('0.00'))
        super().__init__(*args, **kwargs)

    def clean(self, value):
        """Clean and validate money value"""
        if value in self.empty_values:
            return super().clean(value)

        # Remove currency symbols and thousand separators
        if isinstance(value, str):
            value = re.sub(r'[^\d.-]', '', value)

        try:
            value = Decimal(str(value))
        except (ValueError, InvalidOperation):
            raise ValidationError('Enter a valid amount.')

        return super().clean(value)


class PercentageField(forms.DecimalField):
    """Custom field for percentage values"""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_digits', 5)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', Decimal('0.00'))
        kwargs.setdefault('max_value', Decimal('100.00'))
        super().__init__(*args, **kwargs)


# =============================================================================
# VALIDATORS
# =============================================================================

def validate_positive_amount(value):
    """Validate that amount is positive"""
    if value is not None and value <= 0:
        raise ValidationError('Amount must be greater than zero.')


# =============================================================================
# FORM HELPERS
# =============================================================================

class PartialUpdateMixin:
    """
    PATCH forms: every field optional, only submitted fields are changes.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False

    def get_changes(self):
        """Cleaned values of the fields present in the submitted data"""
        return {
            name: value
            for name, value in self.cleaned_data.items()
            if name in self.data
        }


def get_form_errors_as_dict(form):
    """Convert form errors to a {field: [messages]} dict"""
    return {field: [str(error) for error in errors] for field, errors in form.errors.items()}


def get_provided_values(form):
    """Cleaned values, dropping optional fields left empty so service defaults apply"""
    return {
        name: value
        for name, value in form.cleaned_data.items()
        if value not in (None, '')
    }
