"""
Mock 实现：不发 HTTP，只记录 payload（本地开发 / 测试）
"""
import logging

from .base import BaseRecordSink

logger = logging.getLogger(__name__)


class MockRecordSink(BaseRecordSink):
    """所有 payload 保存在 sent 列表里"""

    sink_id = "mock"

    def __init__(self):
        self.sent: list[dict] = []

    def send(self, payload: dict) -> None:
        logger.info("[Mock] Equipment data accepted: %s", payload)
        self.sent.append(dict(payload))
