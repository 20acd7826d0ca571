"""智谱 BigModel（ChatGLM）Provider 适配器。

接口风格与 OpenAI 一致，区别只在于：
- 端点固定为 https://open.bigmodel.cn/api/paas/v4/chat/completions；
- 只发送一条 user 消息，不发送 top_p；
- 额外声明 ``Accept: text/event-stream``。
"""

from typing import Optional

import httpx

from ask_core.domain.models import ZhipuProvider
from ask_core.providers.base import open_sse_stream, require_token
from ask_core.providers.request_builder import build_request
from ask_core.streaming.pipeline import FragmentStream


class ZhipuClient:
    """智谱 ChatGLM 流式客户端。"""

    name = "chatglm"

    def __init__(self, provider: ZhipuProvider, transport: Optional[httpx.BaseTransport] = None):
        self._provider = provider
        self._transport = transport

    def stream(self, prompt: str) -> FragmentStream:
        require_token(self._provider.token, self.name)
        request = build_request(self._provider, prompt)
        return open_sse_stream(request, self.name, self._transport)
