"""JSON 对象边界修复。

同一个 payload 里可能挤着多个 JSON 对象（以 ``}\\n{`` 相连），
也可能只有半个对象。这里按该边界切分后，逐段补齐首尾花括号。

这是启发式而不是解析器：字符串值里恰好包含 ``}\\n{`` 的对象、
或被切成三段以上的对象都可能修复出错误的 JSON，交由 delta 提取阶段丢弃。
"""

from typing import List

OBJECT_BOUNDARY = "}\n{"


def repair_edges(piece: str) -> str:
    starts = piece.startswith("{")
    ends = piece.endswith("}")
    if starts and ends:
        return piece
    if starts:
        return piece + "}"
    if ends:
        return "{" + piece
    return "{" + piece + "}"


def reassemble(payload: str) -> List[str]:
    """把 payload 切分并修复为若干候选 JSON 对象字符串，保持原有顺序。"""

    return [repair_edges(piece) for piece in payload.split(OBJECT_BOUNDARY)]
