"""命令行下的流式输出。"""

import sys
from typing import Optional, TextIO

from ask_core.domain.exceptions import BusinessError
from ask_core.infrastructure.logging.logger import logger
from ask_core.providers.base import ProviderAdapter


def process_response_stream(
    adapter: ProviderAdapter,
    prompt: str,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> bool:
    """把片段按到达顺序写到 out；出错时记录日志、提示用户并停止读取。

    返回 True 表示完整输出，False 表示请求失败或中途出错。
    """

    out = out or sys.stdout
    err = err or sys.stderr
    try:
        with adapter.stream(prompt) as fragments:
            for fragment in fragments:
                out.write(fragment)
                out.flush()
    except BusinessError as e:
        logger.error(
            "Request failed: %s",
            e.message,
            extra={"extra": {"code": e.code, "http_status": e.http_status, **e.extra}},
        )
        err.write(f"Error: {e.message}\n")
        err.flush()
        return False
    out.write("\n")
    out.flush()
    return True
