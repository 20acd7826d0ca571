"""SSE 帧解码。

每次网络读取得到的字节块独立处理：解码为文本，只保留 ``data:`` 行并去掉前缀，
同一块内的多行用换行重新拼接成一个 payload。一个字节块并不对应一个 JSON 对象，
拆分/拼接问题交给 reassembly 模块处理。
"""

from typing import Iterable, Iterator

DATA_PREFIX = "data:"
DONE_MARKER = "[DONE]"


def decode_chunk(chunk: bytes) -> str:
    """把一个字节块转换为 payload 文本；非法 UTF-8 整块视为空串。"""

    try:
        text = chunk.decode("utf-8")
    except UnicodeDecodeError:
        return ""
    lines = [
        line[len(DATA_PREFIX):].strip()
        for line in text.split("\n")
        if line.startswith(DATA_PREFIX)
    ]
    return "\n".join(lines)


def decode_frames(chunks: Iterable[bytes]) -> Iterator[str]:
    """惰性地逐块产出 payload，跳过空 payload 与包含结束标记的 payload。"""

    for chunk in chunks:
        payload = decode_chunk(chunk)
        if not payload.strip() or DONE_MARKER in payload:
            continue
        yield payload
