# savings/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from core.utils import api_endpoint, json_response, error_response, parse_json_body
from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import TransactionForm, TransactionUpdateForm, TransactionFilterForm
from .services import TransactionService, SavingsService
from .stats import get_savings_stats

logger = logging.getLogger(__name__)


# =============================================================================
# TRANSACTIONS
# =============================================================================

@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
def transaction_list(request):
    """Recent transactions (?limit=), or record a new one"""
    service = TransactionService()

    if request.method == 'GET':
        filter_form = TransactionFilterForm(request.GET)
        if not filter_form.is_valid():
            return error_response('Invalid filters', errors=get_form_errors_as_dict(filter_form))
        return json_response(service.get_recent_transactions(filter_form.cleaned_data['limit']))

    form = TransactionForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid transaction data', errors=get_form_errors_as_dict(form))

    data = get_provided_values(form)
    txn = service.record_transaction(
        data.pop('member_id'),
        data.pop('type'),
        data.pop('amount'),
        **data
    )
    return json_response(txn, status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_endpoint
def transaction_detail(request, pk):
    """Fetch a transaction, or change its description/status"""
    service = TransactionService()

    if request.method == 'GET':
        txn = service.get_transaction(pk)
        if txn is None:
            return error_response('Transaction not found', status=404)
        return json_response(txn)

    form = TransactionUpdateForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid transaction data', errors=get_form_errors_as_dict(form))

    return json_response(service.update_transaction(pk, **form.get_changes()))


@require_http_methods(["GET"])
def member_transactions(request, member_id):
    return json_response(TransactionService().list_member_transactions(member_id))


# =============================================================================
# SAVINGS
# =============================================================================

@require_http_methods(["GET"])
def savings_list(request):
    return json_response(SavingsService().list_savings())


@require_http_methods(["GET"])
def savings_stats(request):
    return json_response(get_savings_stats())


@require_http_methods(["GET"])
def member_savings(request, member_id):
    saving = SavingsService().get_saving_by_member(member_id)
    if saving is None:
        return error_response('Savings not found for this member', status=404)
    return json_response(saving)
