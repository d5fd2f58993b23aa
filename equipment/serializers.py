"""
请求解析和格式校验：POST /api/extract/ body -> (note, send)
支持三种 body：
- application/json {"note": "...", "send": true}
- application/json 信封 {"data": "..."}（与 note 文件的 JSON 格式一致）
- text/plain 纯文本 note
"""
import json

from dme_extractor.exceptions import ValidationError

from .note_source import envelope_text

NOTE_FIELD = "note"
ENVELOPE_FIELD = "data"
SEND_FIELD = "send"


def _decode_body(body):
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(
                message="请求体必须是 UTF-8 编码",
                code="INVALID_ENCODING",
                detail={"error": str(e)},
            )
    return body or ""


def validate_extract_data(data):
    """
    校验 JSON 请求数据，返回 (note, send)
    note 的空白检查交给提取核心（InvalidInputError），这里只检查类型
    """
    if not isinstance(data, dict):
        raise ValidationError(
            message="请求体必须是 JSON 对象",
            code="INVALID_REQUEST",
            detail={"errors": [{"field": "_", "message": "请求体必须是 JSON 对象"}]},
        )

    errors = []
    field = NOTE_FIELD if NOTE_FIELD in data else ENVELOPE_FIELD
    note = data.get(field)
    if field not in data:
        errors.append({"field": NOTE_FIELD, "message": "该字段为必填"})
    elif field == ENVELOPE_FIELD:
        # 信封与 note 文件同一规则：非字符串值序列化成 JSON 文本
        note = envelope_text(note)
    elif note is not None and not isinstance(note, str):
        errors.append({"field": NOTE_FIELD, "message": "note 必须是字符串"})

    send = data.get(SEND_FIELD, False)
    if not isinstance(send, bool):
        errors.append({"field": SEND_FIELD, "message": "send 必须是布尔值"})

    if errors:
        raise ValidationError(
            message="数据格式校验失败",
            code="VALIDATION_ERROR",
            detail={"errors": errors},
        )
    return note, send


def parse_extract_request(body, content_type=""):
    """
    解析 POST body -> (note, send)
    JSON 格式错误时抛出 ValidationError；text/plain 时 send 恒为 False
    """
    text = _decode_body(body)
    if not (content_type or "").startswith("application/json"):
        return text, False

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(
            message="Invalid JSON format",
            code="INVALID_JSON",
            detail={"error": str(e)},
        )
    return validate_extract_data(data)
