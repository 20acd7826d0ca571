"""Claude Provider 适配器。

Claude 这里走非流式 Messages API：一次请求拿到完整 JSON 文档，
再把 ``content[0].text`` 作为唯一的片段交给调用方，对外仍然表现为一个片段流。

错误有两种形态：非 2xx 状态码，或者响应体 ``type == "error"``，
两者都会在产出任何片段之前抛出 ApiError。
"""

from typing import Any, Optional

import httpx

from ask_core.domain.exceptions import ApiError, NetworkError
from ask_core.domain.models import ClaudeProvider
from ask_core.infrastructure.logging.logger import logger
from ask_core.providers.base import log_request, new_http_client, require_token
from ask_core.providers.error_body import PARSE_FAILED, error_message_from_data
from ask_core.providers.request_builder import build_request
from ask_core.streaming.pipeline import FragmentStream


class ClaudeClient:
    """Claude 非流式客户端，对外模拟流式语义。"""

    name = "claude"

    def __init__(self, provider: ClaudeProvider, transport: Optional[httpx.BaseTransport] = None):
        self._provider = provider
        self._transport = transport

    def stream(self, prompt: str) -> FragmentStream:
        require_token(self._provider.token, self.name)
        request = build_request(self._provider, prompt)
        log_request(request, self.name)
        try:
            with new_http_client(self._transport) as client:
                resp = client.request(
                    request.method,
                    request.url,
                    json=request.body,
                    headers=request.headers,
                )
        except httpx.HTTPError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)

        data = self._parse_body(resp)
        if not resp.is_success or (isinstance(data, dict) and data.get("type") == "error"):
            logger.error(
                "Error response: %s",
                resp.text,
                extra={"extra": {"provider": self.name, "status": resp.status_code}},
            )
            message = error_message_from_data(data) if data is not None else PARSE_FAILED
            raise ApiError(
                code="API_ERROR",
                message=f"Received error response {resp.status_code}: {message}",
                http_status=resp.status_code,
                provider=self.name,
            )

        text = self._extract_text(data)
        return FragmentStream([text] if text else [], provider=self.name)

    # ---- 辅助方法 ----

    @staticmethod
    def _parse_body(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return None

    def _extract_text(self, data: Any) -> str:
        """取出 ``content[0].text``，结构不符时抛出 UNEXPECTED_FORMAT。"""

        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None
        if not isinstance(text, str):
            raise ApiError(
                code="UNEXPECTED_FORMAT",
                message="Claude response has no content[0].text",
                http_status=200,
                provider=self.name,
            )
        return text
