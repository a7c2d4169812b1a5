# dividends/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from core.utils import api_endpoint, json_response, error_response, parse_json_body
from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import DividendForm, DividendDistributionForm
from .services import DividendService

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
def dividend_list(request):
    service = DividendService()

    if request.method == 'GET':
        return json_response(service.list_dividends())

    form = DividendForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid dividend data', errors=get_form_errors_as_dict(form))

    dividend = service.create_dividend(**get_provided_values(form))
    return json_response(dividend, status=201)


@require_http_methods(["GET"])
def latest_dividend(request):
    dividend = DividendService().get_latest_dividend()
    if dividend is None:
        return error_response('No dividend found', status=404)
    return json_response(dividend)


@require_http_methods(["GET"])
def dividend_distributions(request, pk):
    return json_response(DividendService().list_distributions_for_dividend(pk))


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
def distribute_dividend(request, pk):
    """Split a dividend pro rata across active savers"""
    payload = parse_json_body(request)
    distributions = DividendService().distribute_pro_rata(pk, status=payload.get('status', 'pending'))
    return json_response(distributions, status=201)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
def create_distribution(request):
    form = DividendDistributionForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid distribution data', errors=get_form_errors_as_dict(form))

    distribution = DividendService().create_distribution(**get_provided_values(form))
    return json_response(distribution, status=201)
