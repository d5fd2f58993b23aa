"""
中间件
- RequestMetricsMiddleware：按路由记录 4xx/5xx 与 /api/extract/ 耗时
- AppExceptionMiddleware：View 抛出的 BaseAppException -> 统一 JSON 错误
"""
import time

from .exception_handler import app_exception_handler
from .exceptions import BaseAppException

# 需要记录耗时的路由（url name）
_TIMED_ROUTES = {"extract_note"}


class RequestMetricsMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start = time.perf_counter()
        status = 500
        try:
            response = self.get_response(request)
            status = response.status_code
            return response
        except BaseAppException as exc:
            status = exc.http_status
            raise
        finally:
            self._observe(request, status, time.perf_counter() - start)

    def _observe(self, request, status, duration):
        from equipment.metrics import API_EXTRACT_DURATION, HTTP_4XX, HTTP_5XX

        if status >= 500:
            HTTP_5XX.inc()
        elif status >= 400:
            HTTP_4XX.labels(code=str(status)).inc()

        match = getattr(request, "resolver_match", None)
        if match is not None and match.url_name in _TIMED_ROUTES:
            API_EXTRACT_DURATION.observe(duration)


class AppExceptionMiddleware:
    """process_exception 返回 None 时交给 Django 默认处理"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        return app_exception_handler(request, exception)
