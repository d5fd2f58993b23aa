import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-dev-key-change-in-production')
DEBUG = os.getenv('DJANGO_DEBUG', '1') == '1'
ALLOWED_HOSTS = ['*']

# 无数据库：提取结果不落库，由 record sink 负责转发
INSTALLED_APPS = [
    'equipment',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'dme_extractor.middleware.RequestMetricsMiddleware',
    'dme_extractor.middleware.AppExceptionMiddleware',
]

ROOT_URLCONF = 'dme_extractor.urls'

WSGI_APPLICATION = 'dme_extractor.wsgi.application'

DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# 日志：每个模块 logging.getLogger(__name__)，统一输出到 console
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'equipment': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
        'dme_extractor': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
    },
}

# 下游 DME API（record sink）
DME_API_ENDPOINT = os.getenv('DME_API_ENDPOINT', 'https://alert-api.com/DrExtract')
RECORD_SINK = os.getenv('RECORD_SINK', 'http')
SINK_TIMEOUT_SECONDS = float(os.getenv('SINK_TIMEOUT_SECONDS', '10'))

# Sink 模式：USE_MOCK_SINK=1 用 mock（不发 HTTP），=0 真实发送到 DME_API_ENDPOINT
USE_MOCK_SINK = os.getenv('USE_MOCK_SINK', '1') == '1'

# management command 未指定文件时，扫描该目录下所有 *.txt
BASE_INPUT_DIRECTORY = os.getenv('BASE_INPUT_DIRECTORY', str(BASE_DIR / 'data' / 'input'))

# Redis（Celery broker + result backend）
REDIS_HOST = os.getenv('REDIS_HOST', 'redis')
REDIS_PORT = int(os.getenv('REDIS_PORT', '6379'))
REDIS_URL = f'redis://{REDIS_HOST}:{REDIS_PORT}/0'

# Celery
CELERY_BROKER_URL = REDIS_URL
CELERY_RESULT_BACKEND = REDIS_URL

# Worker 独立进程，单独暴露 Prometheus 端口
WORKER_METRICS_PORT = int(os.getenv('WORKER_METRICS_PORT', '9090'))
