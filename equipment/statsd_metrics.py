"""
Worker / CLI 进程指标：通过 StatsD UDP 发送，由 statsd_exporter 暴露给 Prometheus
不依赖进程内存，多进程 prefork 下可正确聚合
"""
import os

import statsd

_STATSD_HOST = os.getenv("STATSD_HOST", "localhost")
_STATSD_PORT = int(os.getenv("STATSD_PORT", "9125"))
_PREFIX = "dme"

_client = None


def _get_client():
    global _client
    if _client is None:
        _client = statsd.StatsClient(_STATSD_HOST, _STATSD_PORT, prefix=_PREFIX)
    return _client


def record_sent(sink: str):
    # 用 metric 名携带 sink，由 statsd_exporter mapping 转为 label
    _get_client().incr(f"record_sent.{sink}")


def record_send_failed(sink: str):
    _get_client().incr(f"record_send_failed.{sink}")


def sink_latency_seconds(seconds: float):
    _get_client().timing("sink_latency", int(seconds * 1000))


def send_task_retry():
    _get_client().incr("send_task_retry")


def send_task_failure():
    _get_client().incr("send_task_failure")


def note_file_processed(exit_code: int):
    _get_client().incr("note_file_processed.ok" if exit_code == 0 else "note_file_processed.error")
