# members/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from core.utils import api_endpoint, json_response, error_response, parse_json_body
from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import MemberForm, MemberUpdateForm
from .services import MemberService
from .stats import get_member_stats

logger = logging.getLogger(__name__)


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_endpoint
def member_list(request):
    """List all members, or register a new one"""
    service = MemberService()

    if request.method == 'GET':
        status = request.GET.get('status', '').strip()
        if status:
            return json_response(service.list_members_by_status(status))
        return json_response(service.list_members())

    form = MemberForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid member data', errors=get_form_errors_as_dict(form))

    member = service.create_member(**get_provided_values(form))
    return json_response(member, status=201)


@require_http_methods(["GET"])
def member_stats(request):
    return json_response(get_member_stats())


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_endpoint
def member_detail(request, pk):
    """Fetch or update a member"""
    service = MemberService()

    if request.method == 'GET':
        return json_response(service.require_member(pk))

    form = MemberUpdateForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid member data', errors=get_form_errors_as_dict(form))

    return json_response(service.update_member(pk, **form.get_changes()))
