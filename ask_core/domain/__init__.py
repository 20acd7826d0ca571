"""领域层模型与异常。

包含：
- models: ProviderKind 联合类型与 HttpRequest。
- exceptions: 业务异常类型定义。
"""
