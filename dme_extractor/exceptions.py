"""
统一错误处理：BaseAppException 及子类
所有异常格式：type, code, message, detail, http_status
"""


class BaseAppException(Exception):
    """基类：统一错误格式"""
    type = "error"
    code = "UNKNOWN"
    message = "Unknown error"
    http_status = 400

    def __init__(self, message=None, code=None, detail=None, http_status=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.code = code or self.code
        self.detail = detail if detail is not None else {}
        if http_status is not None:
            self.http_status = http_status

    def to_dict(self):
        return {
            "success": False,
            "type": self.type,
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }


class ValidationError(BaseAppException):
    """验证错误：请求格式不对"""
    type = "validation"
    code = "VALIDATION_ERROR"
    message = "Validation failed"
    http_status = 400


class InvalidInputError(ValidationError):
    """
    提取核心唯一会抛出的错误：note 为 None、空串或只有空白
    属于调用方违约，不重试、不回退默认值
    """
    code = "INVALID_INPUT"
    message = "Physician note cannot be null or empty"


class BlockError(BaseAppException):
    """业务阻止：请求方法、路由等不允许"""
    type = "block"
    code = "BLOCK"
    message = "Operation blocked"
    http_status = 409


class RecordSinkError(BaseAppException):
    """下游 DME API 发送失败（HTTP 非 2xx、超时、连接错误）"""
    type = "sink"
    code = "SINK_FAILED"
    message = "Failed to send equipment record"
    http_status = 502
