# Django 启动时加载 Celery app，保证 @shared_task 绑定到该 app
from .celery import app as celery_app

__all__ = ("celery_app",)
