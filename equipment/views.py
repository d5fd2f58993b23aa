"""
接收 physician note，返回结构化 equipment record
View 只负责 HTTP：解析 -> 调 service -> 返回 JSON，错误交给 AppExceptionMiddleware
"""
from django.http import HttpResponse, JsonResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from dme_extractor.exceptions import BlockError

from .serializers import parse_extract_request
from .services import extract_note as extract_note_service


@csrf_exempt
def extract_note(request):
    if request.method != "POST":
        raise BlockError(
            message="Method not allowed",
            code="METHOD_NOT_ALLOWED",
            http_status=405,
        )

    note, send = parse_extract_request(request.body, request.content_type)
    result = extract_note_service(note, send=send)
    return JsonResponse(result, json_dumps_params={"ensure_ascii": False})


@require_GET
@never_cache
def metrics(request):
    """Prometheus 抓取端点"""
    data = generate_latest(REGISTRY)
    return HttpResponse(data, content_type=CONTENT_TYPE_LATEST)
