"""
内部标准格式：提取结果 EquipmentRecord + 设备关键字表
"""
from dataclasses import dataclass
from typing import Optional, Tuple

UNKNOWN = "Unknown"

CPAP = "CPAP"
OXYGEN_TANK = "Oxygen Tank"
WHEELCHAIR = "Wheelchair"

# 关键字 -> 设备类型，按声明顺序匹配，第一个命中即返回
# 同时出现 CPAP 和 oxygen 时结果为 CPAP，顺序即优先级
DEVICE_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("CPAP", CPAP),
    ("oxygen", OXYGEN_TANK),
    ("wheelchair", WHEELCHAIR),
)

USAGE_SLEEP = "sleep"
USAGE_EXERTION = "exertion"
USAGE_SLEEP_AND_EXERTION = "sleep and exertion"


@dataclass(frozen=True)
class EquipmentRecord:
    """
    从一条 physician note 提取出的 DME 订单
    device_type / ordering_provider 永远有值（缺省 "Unknown"），其他字段未找到时为 None
    """
    device_type: str = UNKNOWN
    ordering_provider: str = UNKNOWN
    patient_name: Optional[str] = None
    date_of_birth: Optional[str] = None  # MM/DD/YYYY
    diagnosis: Optional[str] = None
    oxygen_liters: Optional[str] = None  # 如 "2.5 L"
    oxygen_usage: Optional[str] = None

    def __post_init__(self):
        if self.device_type != OXYGEN_TANK and (
            self.oxygen_liters is not None or self.oxygen_usage is not None
        ):
            raise ValueError(
                f"Oxygen details are only valid for '{OXYGEN_TANK}', got device_type={self.device_type!r}"
            )

    @property
    def is_oxygen(self) -> bool:
        return self.device_type == OXYGEN_TANK

    def to_payload(self) -> dict:
        """
        转换为下游 DME API 的 JSON 格式
        未找到的字段直接省略，不输出 null 或空串
        """
        payload = {
            "device": self.device_type,
            "liters": self.oxygen_liters,
            "usage": self.oxygen_usage,
            "diagnosis": self.diagnosis,
            "ordering_provider": self.ordering_provider,
            "patient_name": self.patient_name,
            "dob": self.date_of_birth,
        }
        return {key: value for key, value in payload.items() if value is not None}
