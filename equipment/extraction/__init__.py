"""
DME 订单提取核心：纯函数 note 文本 -> EquipmentRecord
无 I/O、无共享可变状态；文件读取和下游发送由 note_source / sinks 负责
"""
from .types import (
    CPAP,
    DEVICE_KEYWORDS,
    OXYGEN_TANK,
    UNKNOWN,
    WHEELCHAIR,
    EquipmentRecord,
)
from .extractor import NoteExtractor, extract_equipment_data

__all__ = [
    "CPAP",
    "DEVICE_KEYWORDS",
    "OXYGEN_TANK",
    "UNKNOWN",
    "WHEELCHAIR",
    "EquipmentRecord",
    "NoteExtractor",
    "extract_equipment_data",
]
