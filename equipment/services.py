"""
业务逻辑：读 note、规则提取、发送到下游（同步或放队列）
"""
import logging
import time

from dme_extractor.exceptions import BaseAppException, InvalidInputError

from .extraction import UNKNOWN, EquipmentRecord, extract_equipment_data
from .metrics import (
    EXTRACTION_DURATION,
    FIELD_NOT_FOUND,
    INVALID_NOTE,
    NOTES_EXTRACTED,
    RECORD_QUEUED,
)
from .note_source import PhysicianNoteReader
from .sinks import BaseRecordSink, get_record_sink
from .statsd_metrics import note_file_processed, record_sent, sink_latency_seconds
from .tasks import send_record_task

logger = logging.getLogger(__name__)

# 可选字段：未找到时记一次 FIELD_NOT_FOUND
_OPTIONAL_FIELDS = ("patient_name", "date_of_birth", "diagnosis")


def extract_record(note, *, source="api") -> EquipmentRecord:
    """
    规则提取 + 指标
    note 为空时 InvalidInputError 原样抛出
    """
    start = time.perf_counter()
    try:
        record = extract_equipment_data(note)
    except InvalidInputError:
        INVALID_NOTE.inc()
        raise
    EXTRACTION_DURATION.observe(time.perf_counter() - start)

    NOTES_EXTRACTED.labels(device=record.device_type, source=source).inc()
    for field in _OPTIONAL_FIELDS:
        if getattr(record, field) is None:
            FIELD_NOT_FOUND.labels(field=field).inc()
    if record.ordering_provider == UNKNOWN:
        FIELD_NOT_FOUND.labels(field="ordering_provider").inc()
    return record


def send_record(record: EquipmentRecord, sink: BaseRecordSink | None = None) -> dict:
    """
    同步发送（CLI 使用），返回发送的 payload
    失败时 RecordSinkError 原样抛出
    """
    sink = sink or get_record_sink()
    start = time.perf_counter()
    payload = sink.send_record(record)
    sink_latency_seconds(time.perf_counter() - start)
    record_sent(sink.sink_id)
    return payload


def submit_record(record: EquipmentRecord) -> dict:
    """投递 Celery 任务异步发送（API 使用），返回投递的 payload"""
    payload = record.to_payload()
    send_record_task.delay(payload)
    RECORD_QUEUED.inc()
    return payload


def extract_note(note, send=False):
    """
    API 入口：提取并（可选）投递发送
    返回统一的 success 响应体
    """
    record = extract_record(note, source="api")
    if send:
        payload = submit_record(record)
    else:
        payload = record.to_payload()

    return {
        "success": True,
        "data": {
            "record": payload,
            "queued": bool(send),
        },
    }


def process_note_file(file_name, *, send=True, reader=None, sink=None) -> int:
    """
    CLI 入口：读文件 -> 提取 -> 同步发送
    返回退出码：0 成功，1 失败（note 为空、下游发送失败）
    """
    reader = reader or PhysicianNoteReader()
    logger.info("Starting medical equipment extraction process for %s", file_name)
    try:
        note = reader.read(file_name)
        record = extract_record(note, source="file")
        if send:
            send_record(record, sink=sink)
    except BaseAppException as exc:
        logger.error("Extraction failed for %s: %s (%s)", file_name, exc.message, exc.code)
        note_file_processed(1)
        return 1

    logger.info("Medical equipment extraction completed successfully for %s", file_name)
    note_file_processed(0)
    return 0
