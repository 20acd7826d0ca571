"""Provider 适配器抽象接口与公共的流式发送逻辑。

上层（ask_core.console）不直接依赖具体厂商的 HTTP 细节，而是依赖 ProviderAdapter 协议：

- 每类 Provider 实现一个适配器（OpenAIClient / ClaudeClient / ZhipuClient）。
- stream(prompt) 发送请求并返回 FragmentStream；请求级错误在此时立即抛出。

HTTP 客户端按请求创建，生命周期与返回的 FragmentStream 绑定，不设超时。
"""

from contextlib import ExitStack
from typing import Optional, Protocol

import httpx

from ask_core.domain.exceptions import ApiError, NetworkError, ValidationError
from ask_core.domain.models import HttpRequest
from ask_core.infrastructure.logging.logger import logger
from ask_core.providers.error_body import parse_error_message
from ask_core.streaming.pipeline import FragmentStream, iter_fragments


class ProviderAdapter(Protocol):
    """LLM Provider 适配器协议。

    - name: Provider 名称，用于日志与错误信息。
    - stream(prompt): 返回按到达顺序产出文本片段的一次性迭代器。
    """

    name: str

    def stream(self, prompt: str) -> FragmentStream:
        ...


def new_http_client(transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    return httpx.Client(timeout=None, trust_env=False, transport=transport)


def require_token(token: str, provider: str) -> None:
    if not token:
        raise ValidationError(
            code="MISSING_API_KEY",
            message=f"{provider} token not set",
            provider=provider,
        )
    if not token.isascii() or any(ch.isspace() for ch in token):
        raise ValidationError(
            code="INVALID_API_KEY",
            message=f"{provider} token must be ASCII without whitespace",
            provider=provider,
        )


def log_request(request: HttpRequest, provider: str) -> None:
    logger.info("Sending %s request to URL: %s", request.method, request.url)
    logger.info(
        "Request body: %s",
        request.body,
        extra={"extra": {"provider": provider, "url": request.url}},
    )


def open_sse_stream(
    request: HttpRequest,
    provider: str,
    transport: Optional[httpx.BaseTransport] = None,
) -> FragmentStream:
    """发送流式请求，校验状态码，并把响应体接入解码管线。

    非 2xx 响应会完整读取响应体、记录日志，再抛出带状态码与错误信息的 ApiError。
    """

    log_request(request, provider)
    stack = ExitStack()
    try:
        client = stack.enter_context(new_http_client(transport))
        resp = stack.enter_context(
            client.stream(
                request.method,
                request.url,
                json=request.body,
                headers=request.headers,
            )
        )
        if not resp.is_success:
            body = resp.read().decode("utf-8", errors="replace")
            logger.error(
                "Error response: %s",
                body,
                extra={"extra": {"provider": provider, "status": resp.status_code}},
            )
            raise ApiError(
                code="API_ERROR",
                message=f"Received error response {resp.status_code}: {parse_error_message(body)}",
                http_status=resp.status_code,
                provider=provider,
            )
    except httpx.HTTPError as e:
        stack.close()
        raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=provider)
    except Exception:
        stack.close()
        raise
    return FragmentStream(iter_fragments(resp.iter_bytes()), resources=stack, provider=provider)
