"""
Record sink 抽象层：提取结果发往哪里由配置决定
支持下游 HTTP API、Mock，通过 settings 切换
"""
from .base import BaseRecordSink
from .http_sink import HttpRecordSink
from .mock_sink import MockRecordSink
from .factory import get_record_sink, register_record_sink

__all__ = [
    "BaseRecordSink",
    "HttpRecordSink",
    "MockRecordSink",
    "get_record_sink",
    "register_record_sink",
]
