"""能力（function declaration）定义与 shell 命令生成。

每个能力是 abilities/ 目录下的一个 YAML 文件，通过 type 字段区分：

- Shell: 提供 command_template，例如 ``ls {all} {long}``，由模型给出的参数填充。
- Interactive: 提示用户输入，并用正则校验输入内容。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import yaml

from ask_core.domain.exceptions import ConfigError, ValidationError

DEFAULT_ABILITIES_DIR = Path("abilities")


@dataclass
class FunctionParameter:
    """单个能力参数的定义。

    - dangerous: 执行前是否需要用户确认。
    - flag: 布尔参数为 true 时替换成的命令行开关，例如 ``-a``。
    """

    name: str
    param_type: str
    description: str
    required: bool
    dangerous: Optional[bool] = None
    flag: Optional[str] = None


@dataclass
class ShellFunction:
    name: str
    description: str
    command_template: str
    parameters: List[FunctionParameter] = field(default_factory=list)
    type: str = "Shell"


@dataclass
class InteractiveFunction:
    name: str
    description: str
    prompt: str
    regex: str
    parameters: List[FunctionParameter] = field(default_factory=list)
    type: str = "Interactive"


FunctionDeclaration = Union[ShellFunction, InteractiveFunction]


def parse_function_declaration(data: Mapping[str, Any]) -> FunctionDeclaration:
    """把 YAML 内容转换为 FunctionDeclaration。"""

    try:
        params = [FunctionParameter(**p) for p in data.get("parameters") or []]
        kind = data.get("type")
        if kind == "Shell":
            return ShellFunction(
                name=data["name"],
                description=data["description"],
                command_template=data["command_template"],
                parameters=params,
            )
        if kind == "Interactive":
            return InteractiveFunction(
                name=data["name"],
                description=data["description"],
                prompt=data["prompt"],
                regex=data["regex"],
                parameters=params,
            )
    except (KeyError, TypeError) as exc:
        raise ConfigError(code="ABILITY_INVALID", message=f"Invalid function declaration: {exc}")
    raise ConfigError(code="ABILITY_INVALID", message=f"Unknown function declaration type: {kind!r}")


def _read_declaration(path: Path) -> FunctionDeclaration:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(code="ABILITY_READ_ERROR", message=f"Failed to read {path}: {exc}")
    if not isinstance(data, dict):
        raise ConfigError(code="ABILITY_INVALID", message=f"{path} is not a mapping")
    return parse_function_declaration(data)


def load_function_declaration(name: str, root: Union[str, Path] = DEFAULT_ABILITIES_DIR) -> FunctionDeclaration:
    return _read_declaration(Path(root) / f"{name}.yaml")


def list_function_declarations(root: Union[str, Path] = DEFAULT_ABILITIES_DIR) -> List[FunctionDeclaration]:
    """按文件名顺序加载目录下所有 .yaml 能力定义。"""

    directory = Path(root)
    if not directory.is_dir():
        raise ConfigError(code="ABILITY_READ_ERROR", message=f"Abilities directory not found: {directory}")
    return [_read_declaration(p) for p in sorted(directory.glob("*.yaml"))]


def generate_command(
    function: FunctionDeclaration,
    llm_params: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
) -> str:
    """用模型给出的参数填充 command_template。

    - 值为 "true": 替换为参数的 flag；
    - 值为 "false" 或未提供: 连同前面的空格一起删除占位符；
    - 其他值: 原样替换。
    """

    if not isinstance(function, ShellFunction):
        raise ValidationError(
            code="NOT_SHELL_FUNCTION",
            message="This function type won't generate a command",
        )
    values: Dict[str, str] = dict(llm_params)
    command = function.command_template
    for param in function.parameters:
        placeholder = "{" + param.name + "}"
        value = values.get(param.name)
        if value == "true":
            if param.flag:
                command = command.replace(placeholder, param.flag)
        elif value is None or value == "false":
            command = command.replace(" " + placeholder, "")
        else:
            command = command.replace(placeholder, value)
    return command.strip()
