import json
from typing import Any


def extract_delta(obj: str) -> str:
    """取出 ``choices[0].delta.content``；解析失败或结构不符时返回空串。"""

    try:
        data: Any = json.loads(obj)
    except json.JSONDecodeError:
        return ""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""
