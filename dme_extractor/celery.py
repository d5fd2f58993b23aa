"""
Celery app：发送 equipment record 的异步 worker
broker / backend 从 Django settings 的 CELERY_* 读取
"""
import os

from celery import Celery
from celery.signals import worker_ready

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'dme_extractor.settings')

app = Celery('dme_extractor')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()


@worker_ready.connect
def start_worker_metrics(sender, **kwargs):
    """Worker 就绪后在 daemon 线程启动 Prometheus HTTP 服务"""
    from django.conf import settings
    from prometheus_client import start_http_server

    import equipment.metrics  # noqa: F401
    start_http_server(settings.WORKER_METRICS_PORT)
