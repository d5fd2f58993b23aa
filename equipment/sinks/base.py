"""
Record sink 抽象基类
业务代码只依赖此接口，不关心下游是 HTTP API 还是 mock
"""
from abc import ABC, abstractmethod

from equipment.extraction import EquipmentRecord


class BaseRecordSink(ABC):
    """
    抽象基类：所有 sink 的父类
    新增下游时只需继承此类并实现 send
    """

    sink_id: str = "unknown"  # 子类覆盖，如 "http", "mock"

    @abstractmethod
    def send(self, payload: dict) -> None:
        """
        发送已序列化的 record
        :param payload: EquipmentRecord.to_payload() 的结果
        失败时抛出 RecordSinkError
        """
        pass

    def send_record(self, record: EquipmentRecord) -> dict:
        """序列化并发送，返回实际发送的 payload"""
        payload = record.to_payload()
        self.send(payload)
        return payload
