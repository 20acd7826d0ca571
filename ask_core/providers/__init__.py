"""LLM Provider 集成层。

该包下的模块负责：
- 定义适配器协议与公共发送逻辑 (base)。
- 构造各厂商的 HTTP 请求 (request_builder)。
- 提供各厂商的具体实现 (openai_client、claude_client、zhipu_client)。
"""

from typing import Optional

import httpx

from ask_core.domain.exceptions import ValidationError
from ask_core.domain.models import ClaudeProvider, OpenAIProvider, ProviderKind, ZhipuProvider
from ask_core.providers.base import ProviderAdapter
from ask_core.providers.claude_client import ClaudeClient
from ask_core.providers.openai_client import OpenAIClient
from ask_core.providers.zhipu_client import ZhipuClient


def create_adapter(
    provider: ProviderKind,
    transport: Optional[httpx.BaseTransport] = None,
) -> ProviderAdapter:
    """根据 Provider 配置的类型创建对应的适配器实例。"""

    if isinstance(provider, OpenAIProvider):
        return OpenAIClient(provider, transport)
    if isinstance(provider, ClaudeProvider):
        return ClaudeClient(provider, transport)
    if isinstance(provider, ZhipuProvider):
        return ZhipuClient(provider, transport)
    raise ValidationError(
        code="UNKNOWN_PROVIDER",
        message=f"Unsupported provider configuration: {type(provider).__name__}",
    )


__all__ = ["ClaudeClient", "OpenAIClient", "ProviderAdapter", "ZhipuClient", "create_adapter"]
