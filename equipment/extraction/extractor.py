"""
规则提取：physician note 文本 -> EquipmentRecord
每个字段独立匹配同一份原始文本，互不依赖；只有 oxygen 细节在设备为 Oxygen Tank 时才提取
"""
import json
import logging
import re
from typing import Optional

from dme_extractor.exceptions import InvalidInputError

from .types import (
    DEVICE_KEYWORDS,
    OXYGEN_TANK,
    UNKNOWN,
    USAGE_EXERTION,
    USAGE_SLEEP,
    USAGE_SLEEP_AND_EXERTION,
    EquipmentRecord,
)

logger = logging.getLogger(__name__)

# 标签匹配：不要求在行首，大小写不敏感
_ORDERING_PHYSICIAN_PATTERN = re.compile(r"Ordering Physician:\s*([^\r\n]+)", re.IGNORECASE)
_DOCTOR_PATTERN = re.compile(r"Dr\.", re.IGNORECASE)
_ORDERED_BY_PATTERN = re.compile(r"Ordered by ", re.IGNORECASE)
_PATIENT_NAME_PATTERN = re.compile(r"Patient Name:\s*([^\r\n]+)", re.IGNORECASE)
_PATIENT_ALTERNATE_PATTERN = re.compile(r"Patient:\s*([^\r\n]+)", re.IGNORECASE)
# JSON 内嵌的 note：换行是字面量的两个字符 "\n"
_PATIENT_NAME_JSON_PATTERN = re.compile(r"Patient Name:\s*([^\\]+?)\\n", re.IGNORECASE)
_DOB_PATTERN = re.compile(r"DOB:\s*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)
_DIAGNOSIS_PATTERN = re.compile(r"Diagnosis:\s*([^\r\n]+)", re.IGNORECASE)
_DIAGNOSIS_JSON_PATTERN = re.compile(r"Diagnosis:\s*([^\\]+?)\\n", re.IGNORECASE)
_OXYGEN_LITERS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s?L", re.IGNORECASE)

_PROVIDER_TRIM_CHARS = ".\r\n"


def _first_group(pattern: re.Pattern, note: str) -> Optional[str]:
    """返回第一个匹配的 group(1)（去空白），没有匹配或结果为空时返回 None"""
    match = pattern.search(note)
    if match is None:
        return None
    return match.group(1).strip() or None


class NoteExtractor:
    """
    无状态：正则在模块加载时编译，可在多线程中共享同一个实例
    """

    def extract(self, note: Optional[str]) -> EquipmentRecord:
        """
        提取结构化 DME 订单
        note 为 None / 空串 / 纯空白时抛出 InvalidInputError
        """
        if note is None or not isinstance(note, str) or not note.strip():
            raise InvalidInputError()

        logger.info("Extracting medical equipment data from physician note")

        device_type = self.extract_device_type(note)
        oxygen_liters = None
        oxygen_usage = None
        if device_type == OXYGEN_TANK:
            oxygen_liters = self.extract_oxygen_liters(note)
            oxygen_usage = self.extract_oxygen_usage(note)

        record = EquipmentRecord(
            device_type=device_type,
            ordering_provider=self.extract_ordering_provider(note),
            patient_name=self.extract_patient_name(note),
            date_of_birth=self.extract_date_of_birth(note),
            diagnosis=self.extract_diagnosis(note),
            oxygen_liters=oxygen_liters,
            oxygen_usage=oxygen_usage,
        )

        logger.info("Successfully extracted equipment data")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Extracted data: %s", json.dumps(record.to_payload(), indent=2))
        return record

    def extract_device_type(self, note: str) -> str:
        lowered = note.lower()
        for keyword, device_type in DEVICE_KEYWORDS:
            if keyword.lower() in lowered:
                logger.info("Detected device type: %s", device_type)
                return device_type

        logger.warning("No recognized device type found, defaulting to '%s'", UNKNOWN)
        return UNKNOWN

    def extract_ordering_provider(self, note: str) -> str:
        """
        1. "Ordering Physician: <name>"
        2. 退而求其次：从第一个 "Dr." 到文末，去掉 "Ordered by " 和首尾的句号/换行
        3. 都没有 -> "Unknown"
        """
        provider = _first_group(_ORDERING_PHYSICIAN_PATTERN, note)
        if provider:
            logger.info("Detected ordering provider: %s", provider)
            return provider

        doctor = _DOCTOR_PATTERN.search(note)
        if doctor is not None:
            tail = _ORDERED_BY_PATTERN.sub("", note[doctor.start():])
            provider = tail.strip(_PROVIDER_TRIM_CHARS)
            logger.info("Detected ordering provider: %s", provider)
            return provider

        logger.warning("No ordering provider found, defaulting to '%s'", UNKNOWN)
        return UNKNOWN

    def extract_patient_name(self, note: str) -> Optional[str]:
        # 顺序：Patient Name: -> Patient: -> JSON 内嵌的 Patient Name:...\n
        for pattern in (
            _PATIENT_NAME_PATTERN,
            _PATIENT_ALTERNATE_PATTERN,
            _PATIENT_NAME_JSON_PATTERN,
        ):
            patient_name = _first_group(pattern, note)
            if patient_name:
                logger.info("Detected patient name: %s", patient_name)
                return patient_name
        return None

    def extract_date_of_birth(self, note: str) -> Optional[str]:
        dob = _first_group(_DOB_PATTERN, note)
        if dob:
            logger.info("Detected date of birth: %s", dob)
        return dob

    def extract_diagnosis(self, note: str) -> Optional[str]:
        for pattern in (_DIAGNOSIS_PATTERN, _DIAGNOSIS_JSON_PATTERN):
            diagnosis = _first_group(pattern, note)
            if diagnosis:
                logger.info("Detected diagnosis: %s", diagnosis)
                return diagnosis
        return None

    def extract_oxygen_liters(self, note: str) -> Optional[str]:
        match = _OXYGEN_LITERS_PATTERN.search(note)
        if match is None:
            return None
        liters = f"{match.group(1)} L"
        logger.info("Detected oxygen liters: %s", liters)
        return liters

    def extract_oxygen_usage(self, note: str) -> Optional[str]:
        lowered = note.lower()
        has_sleep = USAGE_SLEEP in lowered
        has_exertion = USAGE_EXERTION in lowered

        if has_sleep and has_exertion:
            usage = USAGE_SLEEP_AND_EXERTION
        elif has_sleep:
            usage = USAGE_SLEEP
        elif has_exertion:
            usage = USAGE_EXERTION
        else:
            return None

        logger.info("Detected oxygen usage: %s", usage)
        return usage


_default_extractor = NoteExtractor()


def extract_equipment_data(note: Optional[str]) -> EquipmentRecord:
    """模块级入口：共享同一个无状态 NoteExtractor"""
    return _default_extractor.extract(note)
