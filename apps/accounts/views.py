# accounts/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from core.utils import api_endpoint, json_response, error_response, parse_json_body
from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import UserForm, UserUpdateForm
from .services import UserService

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
def register(request):
    """Register a user account"""
    form = UserForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid user data', errors=get_form_errors_as_dict(form))

    user = UserService().register_user(**get_provided_values(form))
    return json_response(user, status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_endpoint
def user_detail(request, pk):
    """Fetch or update a user profile"""
    service = UserService()

    if request.method == 'GET':
        return json_response(service.require_user(pk))

    form = UserUpdateForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid user data', errors=get_form_errors_as_dict(form))

    return json_response(service.update_user(pk, **form.get_changes()))
