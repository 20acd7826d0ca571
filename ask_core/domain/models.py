"""Provider 配置与 HTTP 请求的领域模型。

- OpenAIProvider / ClaudeProvider / ZhipuProvider: 三类 Provider 的不可变配置，
  合起来构成封闭的 ProviderKind 联合类型，适配层按具体类型分派。
- HttpRequest: 请求构造器的产物，描述一次待发送的 HTTP 请求。

这些模型在一次请求的生命周期内只读，由调用方持有，适配器构造时复制引用即可。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class OpenAIProvider:
    """OpenAI 兼容接口（OpenAI、DeepSeek、Moonshot 等）的配置。"""

    base_url: str
    model: str
    token: str
    temperature: float = 0.7
    top_p: Optional[float] = None
    max_tokens: int = 1024


@dataclass(frozen=True)
class ClaudeProvider:
    """Claude Messages API 的配置。top_p 仅为保持字段一致，不会发送。"""

    base_url: str
    model: str
    token: str
    temperature: float = 0.7
    top_p: Optional[float] = None
    max_tokens: int = 1024


@dataclass(frozen=True)
class ZhipuProvider:
    """智谱 BigModel（ChatGLM）的配置。

    请求总是发往固定的官方端点，不使用 base_url。
    """

    base_url: str
    model: str
    token: str
    temperature: float = 0.7
    top_p: Optional[float] = None
    max_tokens: int = 1024


ProviderKind = Union[OpenAIProvider, ClaudeProvider, ZhipuProvider]


@dataclass(frozen=True)
class HttpRequest:
    """一次待发送的 HTTP 请求。"""

    method: str
    url: str
    headers: Dict[str, str]
    body: Dict[str, Any] = field(default_factory=dict)
