"""Provider 错误响应体解析。

OpenAI 兼容接口（以及智谱）的错误体形如 ``{"error": {"message": "..."}}``；
Claude 的错误体形如 ``{"type": "error", "error": {"type": "...", "message": "..."}}``。
"""

import json
from typing import Any

PARSE_FAILED = "Received an error, but failed to parse the response."
NO_MESSAGE = "Error occurred, but no message provided."
UNEXPECTED_FORMAT = "Received an error, but the response format is unexpected."


def error_message_from_data(data: Any) -> str:
    if not isinstance(data, dict) or "error" not in data:
        return UNEXPECTED_FORMAT
    error = data["error"]
    message = error.get("message") if isinstance(error, dict) else None
    if isinstance(message, str):
        return message
    return NO_MESSAGE


def parse_error_message(body: str) -> str:
    """从错误响应体中提取人类可读的错误信息。"""

    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return PARSE_FAILED
    return error_message_from_data(data)
