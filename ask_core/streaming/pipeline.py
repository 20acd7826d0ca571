"""把 帧解码 -> 对象修复 -> 增量提取 串成一条惰性管线。"""

from contextlib import ExitStack
from typing import Iterable, Iterator, Optional

import httpx

from ask_core.domain.exceptions import NetworkError
from ask_core.streaming.delta import extract_delta
from ask_core.streaming.frames import decode_frames
from ask_core.streaming.reassembly import reassemble


def iter_fragments(chunks: Iterable[bytes]) -> Iterator[str]:
    """从原始字节块产出非空文本片段，顺序与 Provider 发送顺序一致。"""

    for payload in decode_frames(chunks):
        for obj in reassemble(payload):
            text = extract_delta(obj)
            if text:
                yield text


class FragmentStream:
    """一次请求的文本片段流。

    只能迭代一次；迭代结束、迭代中出错、调用 close() 或离开 with 块时，
    都会释放底层的 HTTP 响应与客户端。迭代过程中的 httpx 异常转换为 NetworkError。
    """

    def __init__(
        self,
        fragments: Iterable[str],
        resources: Optional[ExitStack] = None,
        provider: str = "",
    ):
        self.provider = provider
        self._fragments = iter(fragments)
        self._resources = resources
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "FragmentStream":
        return self

    def __next__(self) -> str:
        if self._closed:
            raise StopIteration
        try:
            return next(self._fragments)
        except StopIteration:
            self.close()
            raise
        except httpx.HTTPError as e:
            self.close()
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.provider)
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            close = getattr(self._fragments, "close", None)
            if close is not None:
                close()
        finally:
            if self._resources is not None:
                self._resources.close()

    def __enter__(self) -> "FragmentStream":
        return self

    def __exit__(self, *exc) -> bool:
        self.close()
        return False

    def __del__(self):
        if not getattr(self, "_closed", True):
            self.close()
