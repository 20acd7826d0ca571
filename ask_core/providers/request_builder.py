"""各 Provider 的 HTTP 请求构造。

只负责把 prompt + ProviderKind 转成 HttpRequest（方法、URL、请求头、JSON 请求体），
不发送请求，也不设置超时或重试。
"""

from ask_core.domain.exceptions import ValidationError
from ask_core.domain.models import (
    ClaudeProvider,
    HttpRequest,
    OpenAIProvider,
    ProviderKind,
    ZhipuProvider,
)

SYSTEM_PROMPT = "You are a helpful assistant."
ANTHROPIC_VERSION = "2023-06-01"
ZHIPU_ENDPOINT = "https://open.bigmodel.cn/api/paas/v4/chat/completions"
DEFAULT_TOP_P = 1.0


def build_openai_request(provider: OpenAIProvider, prompt: str) -> HttpRequest:
    top_p = provider.top_p if provider.top_p is not None else DEFAULT_TOP_P
    return HttpRequest(
        method="POST",
        url=f"{provider.base_url}/chat/completions",
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {provider.token}",
        },
        body={
            "model": provider.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": provider.temperature,
            "top_p": top_p,
            "max_tokens": provider.max_tokens,
            "stream": True,
        },
    )


def build_claude_request(provider: ClaudeProvider, prompt: str) -> HttpRequest:
    """Claude 走非流式接口：没有 system 轮次、没有 top_p、没有 stream 字段。"""

    return HttpRequest(
        method="POST",
        url=f"{provider.base_url}/messages",
        headers={
            "Content-Type": "application/json",
            "x-api-key": provider.token,
            "anthropic-version": ANTHROPIC_VERSION,
        },
        body={
            "model": provider.model,
            "max_tokens": provider.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        },
    )


def build_zhipu_request(provider: ZhipuProvider, prompt: str) -> HttpRequest:
    # 固定端点，忽略配置中的 base_url
    return HttpRequest(
        method="POST",
        url=ZHIPU_ENDPOINT,
        headers={
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
            "Authorization": f"Bearer {provider.token}",
        },
        body={
            "model": provider.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": provider.temperature,
            "max_tokens": provider.max_tokens,
            "stream": True,
        },
    )


def build_request(provider: ProviderKind, prompt: str) -> HttpRequest:
    """按 Provider 类型分派到对应的构造函数。"""

    if isinstance(provider, OpenAIProvider):
        return build_openai_request(provider, prompt)
    if isinstance(provider, ClaudeProvider):
        return build_claude_request(provider, prompt)
    if isinstance(provider, ZhipuProvider):
        return build_zhipu_request(provider, prompt)
    raise ValidationError(
        code="UNKNOWN_PROVIDER",
        message=f"Unsupported provider configuration: {type(provider).__name__}",
    )
