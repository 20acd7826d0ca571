"""YAML 配置文件的定位、读写与编辑。"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ask_core.config.settings import AppSettings, build_settings
from ask_core.domain.exceptions import ConfigError, ValidationError
from ask_core.infrastructure.logging.logger import logger

CONFIG_DIR_NAME = ".askgpt"
CONFIG_FILE_NAME = "config.yaml"
EDITORS = ("code", "gedit", "nano", "vi", "notepad")
STRING_FIELDS = {"default_adapter", "type", "base_url", "default_model", "token", "level", "log_dir"}


def home_config_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def default_config() -> Dict[str, Any]:
    """首次运行时写入的默认配置，token 需要用户自行填写。"""

    return {
        "default_adapter": "openai_adapter",
        "openai_adapter": {
            "type": "OpenAI",
            "base_url": "https://api.openai.com/v1",
            "default_model": "gpt-4o-mini",
            "token": "your-openai-token",
            "temperature": 0.7,
            "top_p": 1.0,
            "max_tokens": 1024,
        },
        "claude_adapter": {
            "type": "Claude",
            "base_url": "https://api.anthropic.com/v1",
            "default_model": "claude-3-5-haiku-latest",
            "token": "your-claude-token",
            "temperature": 0.7,
            "max_tokens": 1024,
        },
        "chatglm_adapter": {
            "type": "ChatGLM",
            "base_url": "https://open.bigmodel.cn/api/paas/v4",
            "default_model": "glm-4-flash",
            "token": "your-chatglm-token",
            "temperature": 0.7,
            "max_tokens": 1024,
        },
        "logging": {"level": "info", "log_dir": None, "redact_content": False},
    }


def read_config(path: Union[str, Path]) -> Dict[str, Any]:
    """读取 YAML 配置；文件不存在、无法解析或不是 mapping 时抛出 ConfigError。"""

    p = Path(path).expanduser()
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(code="CONFIG_READ_ERROR", message=f"Failed to read config file {p}: {exc}")
    if not isinstance(data, dict):
        raise ConfigError(code="CONFIG_READ_ERROR", message=f"Config file {p} is not a mapping")
    return data


def write_config(path: Union[str, Path], data: Dict[str, Any]) -> None:
    p = Path(path).expanduser()
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(
            yaml.safe_dump(data, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
    except OSError as exc:
        raise ConfigError(code="CONFIG_WRITE_ERROR", message=f"Failed to write config file {p}: {exc}")


def load_settings(path: Union[str, Path]) -> AppSettings:
    """读取配置文件并与环境变量合并为 AppSettings。"""

    return build_settings(read_config(path))


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """确定本次运行使用的配置文件。

    顺序：命令行显式指定 > ~/.askgpt/config.yaml > 当前目录下可用的 config.yaml；
    都没有时在 home 目录写入默认配置并返回该路径。
    """

    if explicit:
        return Path(explicit).expanduser()

    home_path = home_config_path()
    if home_path.exists():
        return home_path

    local_path = Path.cwd() / CONFIG_FILE_NAME
    if local_path.exists():
        try:
            load_settings(local_path)
            return local_path
        except ConfigError:
            print("Found an invalid config file in the current directory. Creating a default config.")

    write_config(home_path, default_config())
    print(f"Created a default config file at {home_path}. Please update it with your settings.")
    return home_path


def set_value(data: Dict[str, Any], key: str, raw_value: str) -> Dict[str, Any]:
    """按点分路径修改配置，例如 ``openai_adapter.token``。

    原值是字符串（token、base_url、default_adapter 等）时按原样保存；
    其余字段按 YAML 标量规则解析（"0.5" -> 0.5，"true" -> True）。
    修改后的整份配置必须能通过 AppSettings 校验，否则不生效。
    """

    parts = [p for p in key.strip().split(".") if p]
    if not parts:
        raise ValidationError(code="INVALID_CONFIG_KEY", message=f"Invalid config key: {key!r}")

    updated = dict(data)
    node = updated
    for part in parts[:-1]:
        child = node.get(part)
        child = dict(child) if isinstance(child, dict) else {}
        node[part] = child
        node = child
    node[parts[-1]] = _coerce_value(parts[-1], node.get(parts[-1]), raw_value)

    build_settings(updated)
    return updated


def _coerce_value(name: str, current: Any, raw_value: str) -> Any:
    if name in STRING_FIELDS or isinstance(current, str) or raw_value == "":
        return raw_value
    try:
        value = yaml.safe_load(raw_value)
    except yaml.YAMLError:
        return raw_value
    # 只接受标量，避免 "a: b" 之类的输入被解析成 mapping
    if isinstance(value, (dict, list)):
        return raw_value
    return value


def parse_assignment(assignment: str) -> tuple[str, str]:
    """拆分 ``key=value`` 形式的命令行参数。"""

    if "=" not in assignment:
        raise ValidationError(
            code="INVALID_SET_FORMAT",
            message="Invalid format for --set, expected key=value",
        )
    key, value = assignment.split("=", 1)
    return key.strip(), value.strip()


def open_in_editor(path: Union[str, Path]) -> int:
    """用第一个可用的编辑器打开配置文件，返回编辑器退出码。"""

    for name in EDITORS:
        editor = shutil.which(name)
        if editor:
            logger.info("Opening %s with %s", path, editor)
            return subprocess.run([editor, str(path)], check=False).returncode
    raise ValidationError(code="NO_EDITOR", message="No suitable editor found")
