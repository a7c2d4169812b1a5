# core/views.py

from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
import logging

from utils.forms import get_form_errors_as_dict, get_provided_values
from .forms import TaskForm, TaskUpdateForm
from .services import TaskService
from .stats import get_dashboard_summary
from .utils import api_endpoint, json_response, error_response, parse_json_body

logger = logging.getLogger(__name__)


# =============================================================================
# DASHBOARD
# =============================================================================

@require_http_methods(["GET"])
def dashboard(request):
    return json_response(get_dashboard_summary())


# =============================================================================
# TASKS
# =============================================================================

@require_http_methods(["GET"])
def pending_tasks(request):
    return json_response(TaskService().list_pending_tasks())


@require_http_methods(["GET"])
def tasks_by_type(request, task_type):
    return json_response(TaskService().list_tasks_by_type(task_type))


@require_http_methods(["GET"])
def tasks_by_assignee(request, user_id):
    return json_response(TaskService().list_tasks_by_assignee(user_id))


@csrf_exempt
@require_http_methods(["POST"])
@api_endpoint
def task_create(request):
    form = TaskForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid task data', errors=get_form_errors_as_dict(form))

    data = get_provided_values(form)
    task = TaskService().create_task(data.pop('title'), data.pop('type'), **data)
    return json_response(task, status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_endpoint
def task_detail(request, pk):
    service = TaskService()

    if request.method == 'GET':
        task = service.get_task(pk)
        if task is None:
            return error_response('Task not found', status=404)
        return json_response(task)

    form = TaskUpdateForm(parse_json_body(request))
    if not form.is_valid():
        return error_response('Invalid task data', errors=get_form_errors_as_dict(form))

    return json_response(service.update_task(pk, **form.get_changes()))
