"""
工厂函数：根据配置返回对应 Record Sink
USE_MOCK_SINK=1 时一律返回 mock；选中的 sink 与 endpoint 记 INFO 日志
"""
import logging
from typing import Dict, Type

from django.conf import settings

from .base import BaseRecordSink
from .http_sink import HttpRecordSink
from .mock_sink import MockRecordSink

logger = logging.getLogger(__name__)

# sink 标识 -> Sink 类
_SINK_REGISTRY: Dict[str, Type[BaseRecordSink]] = {
    "http": HttpRecordSink,
    "mock": MockRecordSink,
}


def get_record_sink(sink: str | None = None) -> BaseRecordSink:
    """
    sink: 从参数传入，或从 settings.RECORD_SINK 读取，默认 "http"
    未注册的 sink 抛出 ValueError
    """
    requested = str(sink if sink is not None else getattr(settings, "RECORD_SINK", "http")).lower()

    if getattr(settings, "USE_MOCK_SINK", True):
        if requested != MockRecordSink.sink_id:
            logger.info("USE_MOCK_SINK is set, routing '%s' records to the mock sink", requested)
        return MockRecordSink()

    sink_cls = _SINK_REGISTRY.get(requested)
    if sink_cls is None:
        raise ValueError(f"Unknown record sink: {requested}. Known: {sorted(_SINK_REGISTRY)}")

    instance = sink_cls()
    endpoint = getattr(instance, "endpoint", None)
    if endpoint:
        logger.info("Using record sink '%s' -> %s", requested, endpoint)
    else:
        logger.info("Using record sink '%s'", requested)
    return instance


def register_record_sink(sink: str, sink_cls: Type[BaseRecordSink]) -> None:
    """注册新 Sink，名称不区分大小写"""
    _SINK_REGISTRY[sink.lower()] = sink_cls
