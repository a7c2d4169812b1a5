# core/utils.py

"""
Central utilities for cooperative operations
Prevents code duplication and ensures consistency
"""

from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone
from dateutil.relativedelta import relativedelta
from decimal import Decimal, InvalidOperation
from datetime import date, datetime, time
from functools import wraps
import json
import logging

from .exceptions import NotFound, InvalidArgument

logger = logging.getLogger(__name__)


# =============================================================================
# CURRENCY & MONEY FORMATTING
# =============================================================================

def get_base_currency():
    """Currency symbol configured for the cooperative (defaults to 'Rp')"""
    return getattr(settings, 'COOP_CURRENCY', 'Rp')


def format_money(amount, include_symbol=True):
    """
    Format money amount for log lines and task descriptions.

    Args:
        amount: Decimal or numeric value to format
        include_symbol: Whether to include currency symbol

    Returns:
        str: Formatted money string
    """
    try:
        amount_decimal = Decimal(str(amount or 0))
        formatted = f"{amount_decimal:,.2f}"
        return f"{get_base_currency()} {formatted}" if include_symbol else formatted
    except (ValueError, TypeError, InvalidOperation):
        return str(amount)


def to_decimal(value, field_name='amount'):
    """
    Coerce a numeric value to Decimal.

    Raises:
        InvalidArgument: value is not a number
    """
    if isinstance(value, Decimal):
        return value
    if value is None or isinstance(value, bool):
        raise InvalidArgument(f"{field_name} must be a number")
    try:
        return Decimal(str(value))
    except (ValueError, TypeError, InvalidOperation):
        raise InvalidArgument(f"{field_name} must be a number")


# =============================================================================
# DATE HELPERS
# =============================================================================

def ensure_aware(value):
    """
    Normalise a date or datetime to an aware datetime in the current timezone.

    Plain dates become midnight of that day. ``None`` passes through.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value
    if isinstance(value, date):
        return timezone.make_aware(datetime.combine(value, time.min))
    raise InvalidArgument(f"Expected a date, got {value!r}")


def month_key(value):
    """(year, month) of a datetime in the cooperative's timezone"""
    local = timezone.localtime(ensure_aware(value))
    return local.year, local.month


def get_recent_months(count=6, now=None):
    """
    Calendar months ending with the current one, most recent first.

    Returns:
        list: [(year, month), ...] with ``count`` entries
    """
    current = timezone.localtime(now or timezone.now()).date().replace(day=1)
    months = []
    for offset in range(count):
        target = current - relativedelta(months=offset)
        months.append((target.year, target.month))
    return months


# =============================================================================
# JSON API RESPONSES
# =============================================================================

def json_response(data, status=200):
    """Serialise records (or plain data) with Django's JSON encoder"""
    return JsonResponse(_serialise(data), status=status, safe=False)


def _serialise(data):
    if hasattr(data, 'to_dict'):
        return data.to_dict()
    if isinstance(data, (list, tuple)):
        return [_serialise(item) for item in data]
    if isinstance(data, dict):
        return {key: _serialise(value) for key, value in data.items()}
    return data


def error_response(message, status=400, errors=None):
    payload = {'error': message}
    if errors:
        payload['errors'] = errors
    return JsonResponse(payload, status=status)


def parse_json_body(request):
    """
    Decode a JSON request body into a dict.

    Raises:
        InvalidArgument: body is not a JSON object
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise InvalidArgument('Request body must be valid JSON')
    if not isinstance(payload, dict):
        raise InvalidArgument('Request body must be a JSON object')
    return payload


def api_endpoint(view_func):
    """
    Translate service errors into JSON error responses.

    NotFound -> 404, InvalidArgument -> 400. Anything else propagates.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except NotFound as e:
            return error_response(str(e), status=404)
        except InvalidArgument as e:
            logger.info(f"Rejected {request.method} {request.path}: {e}")
            return error_response(str(e), status=400)
    return wrapper
