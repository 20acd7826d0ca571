"""askgpt 核心包。

向多个 LLM Provider 发起对话请求，并把回复按到达顺序逐段输出。
包括配置加载、领域模型、Provider 适配、流式解码与命令行入口。
"""

__version__ = "0.1.0"
