"""配置管理模块。

配置来源（优先级从高到低）：
1. 环境变量（前缀 ASKGPT_，嵌套字段用双下划线，例如 ASKGPT_OPENAI_ADAPTER__TOKEN）。
2. .env 文件。
3. YAML 配置文件（默认 ~/.askgpt/config.yaml，路径解析见 config_file 模块）。

每个 adapter 段落通过 type 字段区分 Provider 类型，
to_provider() 把它转换为领域层的不可变 ProviderKind。
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ask_core.domain.exceptions import ConfigError, ValidationError
from ask_core.domain.models import ClaudeProvider, OpenAIProvider, ProviderKind, ZhipuProvider


class OpenAIAdapterSettings(BaseModel):
    """OpenAI 兼容接口配置段。"""

    type: Literal["OpenAI"] = "OpenAI"
    base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-4o-mini"
    token: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=1.0, ge=0.0, le=1.0)
    max_tokens: int = Field(default=1024, ge=1)

    def to_provider(self) -> ProviderKind:
        return OpenAIProvider(
            base_url=self.base_url.rstrip("/"),
            model=self.default_model,
            token=self.token,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
        )


class ClaudeAdapterSettings(BaseModel):
    """Claude Messages API 配置段（没有 top_p）。"""

    type: Literal["Claude"] = "Claude"
    base_url: str = "https://api.anthropic.com/v1"
    default_model: str = "claude-3-5-haiku-latest"
    token: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    max_tokens: int = Field(default=1024, ge=1)

    def to_provider(self) -> ProviderKind:
        return ClaudeProvider(
            base_url=self.base_url.rstrip("/"),
            model=self.default_model,
            token=self.token,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


class ChatGLMAdapterSettings(BaseModel):
    """智谱 ChatGLM 配置段（没有 top_p，端点固定）。"""

    type: Literal["ChatGLM"] = "ChatGLM"
    base_url: str = "https://open.bigmodel.cn/api/paas/v4"
    default_model: str = "glm-4-flash"
    token: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    max_tokens: int = Field(default=1024, ge=1)

    def to_provider(self) -> ProviderKind:
        return ZhipuProvider(
            base_url=self.base_url.rstrip("/"),
            model=self.default_model,
            token=self.token,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


AdapterSettings = Annotated[
    Union[OpenAIAdapterSettings, ClaudeAdapterSettings, ChatGLMAdapterSettings],
    Field(discriminator="type"),
]


class LoggingSettings(BaseModel):
    """日志配置段。log_dir 为空时写入系统临时目录。"""

    level: str = "info"
    log_dir: Optional[str] = None
    redact_content: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.lower() not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"Unknown log level: {v!r}")
        return v.lower()


class AppSettings(BaseSettings):
    """askgpt 全部配置。"""

    default_adapter: str = Field(
        default="openai_adapter",
        description="当前使用的 adapter 段落名，例如 openai_adapter、claude_adapter",
    )
    openai_adapter: AdapterSettings = Field(default_factory=OpenAIAdapterSettings)
    claude_adapter: AdapterSettings = Field(default_factory=ClaudeAdapterSettings)
    chatglm_adapter: AdapterSettings = Field(default_factory=ChatGLMAdapterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="ASKGPT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # 配置文件内容以 init 参数传入，环境变量优先于它
        return (
            env_settings,
            dotenv_settings,
            init_settings,
            file_secret_settings,
        )

    def adapter_names(self) -> list[str]:
        return ["openai_adapter", "claude_adapter", "chatglm_adapter"]

    def active_provider(self) -> ProviderKind:
        """返回 default_adapter 指向的 Provider 配置。"""

        name = self.default_adapter
        if name not in self.adapter_names():
            raise ValidationError(
                code="UNKNOWN_ADAPTER",
                message=f"Unsupported adapter specified in the configuration: {name!r}",
            )
        return getattr(self, name).to_provider()


def build_settings(data: Dict[str, Any]) -> AppSettings:
    """用配置文件内容构造 AppSettings，校验失败统一转为 ConfigError。"""

    try:
        return AppSettings(**data)
    except PydanticValidationError as exc:
        raise ConfigError(code="CONFIG_INVALID", message=str(exc))
