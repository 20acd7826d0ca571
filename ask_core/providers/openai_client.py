"""OpenAI 兼容 Provider 适配器。

- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <token>
- 响应: SSE，每行 ``data: {...}``，以 ``data: [DONE]`` 结束。

DeepSeek、Moonshot 等兼容 OpenAI 协议的服务都可以直接使用本适配器。
"""

from typing import Optional

import httpx

from ask_core.domain.models import OpenAIProvider
from ask_core.providers.base import open_sse_stream, require_token
from ask_core.providers.request_builder import build_request
from ask_core.streaming.pipeline import FragmentStream


class OpenAIClient:
    """OpenAI 兼容接口的流式客户端。"""

    name = "openai"

    def __init__(self, provider: OpenAIProvider, transport: Optional[httpx.BaseTransport] = None):
        self._provider = provider
        self._transport = transport

    def stream(self, prompt: str) -> FragmentStream:
        require_token(self._provider.token, self.name)
        request = build_request(self._provider, prompt)
        return open_sse_stream(request, self.name, self._transport)
