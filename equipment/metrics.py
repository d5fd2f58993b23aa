"""
Prometheus 指标定义（Web 进程）
"""
from prometheus_client import Counter, Histogram

# 业务指标
NOTES_EXTRACTED = Counter(
    "notes_extracted_total",
    "成功提取的 physician note 数",
    ["device", "source"],
)
FIELD_NOT_FOUND = Counter(
    "extraction_field_not_found_total",
    "提取时未找到的字段次数",
    ["field"],
)
INVALID_NOTE = Counter(
    "invalid_note_total",
    "空 note / 纯空白 note 被拒绝的次数",
)
RECORD_QUEUED = Counter(
    "equipment_record_queued_total",
    "投递到 Celery 等待发送的 record 数",
)

# 性能指标
API_EXTRACT_DURATION = Histogram(
    "api_extract_duration_seconds",
    "POST /api/extract/ 响应时间",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)
EXTRACTION_DURATION = Histogram(
    "extraction_duration_seconds",
    "单条 note 规则提取耗时",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05),
)

# 错误指标
HTTP_5XX = Counter("http_5xx_total", "5xx 错误数")
HTTP_4XX = Counter("http_4xx_total", "4xx 错误数", ["code"])
VALIDATION_ERROR = Counter("validation_error_total", "请求校验失败次数", ["code"])
BLOCK_ERROR = Counter("block_error_total", "Block 错误次数", ["code"])
SINK_ERROR = Counter("sink_error_total", "同步发送到下游 API 失败次数")
