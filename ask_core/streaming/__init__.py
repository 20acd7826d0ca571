"""流式响应解码。

- frames: 原始字节块 -> ``data:`` payload。
- reassembly: payload -> 候选 JSON 对象字符串。
- delta: JSON 对象 -> 增量文本。
- pipeline: 组合上述步骤，并提供持有连接的 FragmentStream。
"""

from ask_core.streaming.delta import extract_delta
from ask_core.streaming.frames import decode_chunk, decode_frames
from ask_core.streaming.pipeline import FragmentStream, iter_fragments
from ask_core.streaming.reassembly import reassemble

__all__ = [
    "FragmentStream",
    "decode_chunk",
    "decode_frames",
    "extract_delta",
    "iter_fragments",
    "reassemble",
]
