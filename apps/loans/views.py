# loans/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from core.utils import api_endpoint, json_response, error_response, parse_json_body
from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import LoanForm, LoanUpdateForm, LoanFilterForm
from .services import LoanService
from .stats import get_loan_stats

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
def loan_list(request):
    """Loans by ?status= (approved and active loans by default), or apply for one"""
    service = LoanService()

    if request.method == 'GET':
        filter_form = LoanFilterForm(request.GET)
        if not filter_form.is_valid():
            return error_response('Invalid filters', errors=get_form_errors_as_dict(filter_form))
        status = filter_form.cleaned_data['status']
        if status:
            return json_response(service.list_loans_by_status(status))
        return json_response(service.list_active_loans())

    form = LoanForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid loan data', errors=get_form_errors_as_dict(form))

    loan = service.create_loan(**get_provided_values(form))
    return json_response(loan, status=201)


@require_http_methods(["GET"])
def loan_stats(request):
    return json_response(get_loan_stats())


@require_http_methods(["GET"])
def member_loans(request, member_id):
    return json_response(LoanService().list_member_loans(member_id))


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_endpoint
def loan_detail(request, pk):
    """Fetch a loan, or update it (approval workflow included)"""
    service = LoanService()

    if request.method == 'GET':
        return json_response(service.require_loan(pk))

    form = LoanUpdateForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid loan data', errors=get_form_errors_as_dict(form))

    return json_response(service.update_loan(pk, **form.get_changes()))
