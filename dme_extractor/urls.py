from django.urls import path
from equipment import views

# RESTful API
"""
- POST /api/extract/  -> 提交 physician note，返回结构化 equipment record（可选转发下游）
- GET  /metrics/      -> Prometheus 抓取端点
"""
urlpatterns = [
    path('api/extract/', views.extract_note, name='extract_note'),
    path('metrics/', views.metrics, name='metrics'),
]
