"""
Note source：按文件名读取 physician note
- JSON 信封（{"data": "..."}）自动解包，否则原样当作纯文本
- 文件名为空、文件不存在或读取失败时返回默认 note，不抛异常
"""
import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PHYSICIAN_NOTE = (
    "Patient needs a CPAP with full face mask and humidifier. AHI > 20. Ordered by Dr. Cameron."
)
JSON_DATA_FIELD = "data"


def envelope_text(data) -> Optional[str]:
    """data 字段 -> note 文本：字符串原样，其他 JSON 值序列化成 JSON 文本（API 与文件共用）"""
    if data is None or isinstance(data, str):
        return data
    return json.dumps(data)


def unwrap_note_envelope(content: str) -> str:
    """
    尽力解析：content 是带非空 data 字段的 JSON 对象时返回 data，否则原样返回
    解析失败不报错，纯文本 note 必须原样可用
    """
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError):
        logger.debug("Content is not valid JSON, using as plain text")
        return content

    if not isinstance(parsed, dict):
        return content

    data = envelope_text(parsed.get(JSON_DATA_FIELD))
    if not data:
        return content

    logger.info("Extracted data from JSON format file")
    return data


class PhysicianNoteReader:
    """
    从文件读取 physician note
    相对路径按当前工作目录解析，绝对路径直接使用
    """

    def __init__(self, default_note: str = DEFAULT_PHYSICIAN_NOTE, encoding: str = "utf-8"):
        self.default_note = default_note
        self.encoding = encoding

    def resolve_path(self, file_name: str) -> Path:
        path = Path(file_name)
        if path.is_absolute():
            return path
        return Path.cwd() / path

    def read(self, file_name: Optional[str]) -> str:
        if not file_name or not str(file_name).strip():
            logger.warning("No file name given. Using default note")
            return self.default_note

        file_path = self.resolve_path(str(file_name))
        logger.info("Reading physician note from: %s", file_path)

        if not file_path.is_file():
            logger.warning("File not found: %s. Using default note", file_path)
            return self.default_note

        try:
            content = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading physician note from %s: %s. Using default note", file_name, exc)
            return self.default_note

        logger.info("Successfully read %d characters from file: %s", len(content), file_name)
        return unwrap_note_envelope(content)


def read_physician_note(file_name: Optional[str]) -> str:
    """便捷入口：使用默认配置的 PhysicianNoteReader"""
    return PhysicianNoteReader().read(file_name)
