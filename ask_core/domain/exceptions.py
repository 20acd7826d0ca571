"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
CLI 层（ask_core.console / ask_core.cli）只需捕获这一基类即可统一提示用户。

注意：单个流式分片内部的问题（非法 UTF-8、无法解析的 JSON）不会抛出异常，
而是在解码管线内部静默跳过；只有“整个请求”级别的失败才会走这里的异常。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "API_ERROR"）。
        message: 用户可读错误信息。
        http_status: Provider 返回的 HTTP 状态码；非 HTTP 错误默认 400。
        extra: 其他补充字段（例如 provider、url 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、读取响应体时连接中断等。"""


class ApiError(BusinessError):
    """Provider 返回非 2xx 状态，或返回了 error 类型的响应体。"""


class ValidationError(BusinessError):
    """参数或配置校验失败（缺少 token、未知 Provider 等）。"""


class ConfigError(BusinessError):
    """配置文件无法读取、写入或解析。"""
