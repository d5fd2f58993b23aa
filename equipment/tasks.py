"""
Celery 异步任务：把 equipment record 发送到下游 DME API
支持失败重试（最多 3 次，指数退避）
"""
import logging
import time

from celery import shared_task

from dme_extractor.exceptions import RecordSinkError
from equipment.sinks import get_record_sink
from equipment.statsd_metrics import (
    record_send_failed,
    record_sent,
    send_task_failure,
    send_task_retry,
    sink_latency_seconds,
)

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def send_record_task(self, payload):
    """
    payload 为 EquipmentRecord.to_payload() 的结果（JSON 可序列化）
    失败时指数退避重试：2^retries 秒（1次:1s, 2次:2s, 3次:4s）
    """
    sink = get_record_sink()
    start = time.perf_counter()
    try:
        sink.send(payload)
    except RecordSinkError as exc:
        record_send_failed(sink.sink_id)
        if self.request.retries >= self.max_retries:
            logger.error("Giving up on equipment record after %d retries: %s", self.request.retries, exc)
            send_task_failure()
            raise
        send_task_retry()
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    sink_latency_seconds(time.perf_counter() - start)
    record_sent(sink.sink_id)
    return True
