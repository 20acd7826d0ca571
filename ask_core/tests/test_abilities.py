from pathlib import Path

import pytest

from ask_core.domain.exceptions import ConfigError, ValidationError
from ask_core.tools.abilities import (
    InteractiveFunction,
    ShellFunction,
    generate_command,
    list_function_declarations,
    load_function_declaration,
    parse_function_declaration,
)

ABILITIES_DIR = Path(__file__).resolve().parents[2] / "abilities"


def test_generate_command_ls_flags():
    ls = load_function_declaration("ls", ABILITIES_DIR)
    assert generate_command(ls, []) == "ls"
    assert generate_command(ls, [("all", "true")]) == "ls -a"
    assert generate_command(ls, [("long", "true")]) == "ls -l"
    assert generate_command(ls, [("all", "true"), ("long", "true")]) == "ls -a -l"
    assert generate_command(ls, {"all": "false", "path": "/tmp"}) == "ls /tmp"


def test_generate_command_eval():
    ev = load_function_declaration("eval", ABILITIES_DIR)
    assert ev.parameters[0].dangerous is True
    assert generate_command(ev, [("command", "echo Hello, world!")]) == "echo Hello, world!"


def test_interactive_declaration_cannot_generate_command():
    confirm = load_function_declaration("confirm", ABILITIES_DIR)
    assert isinstance(confirm, InteractiveFunction)
    with pytest.raises(ValidationError):
        generate_command(confirm, [])


def test_list_function_declarations():
    names = [d.name for d in list_function_declarations(ABILITIES_DIR)]
    assert names == ["confirm", "eval", "ls"]


def test_parse_function_declaration_errors(tmp_path):
    with pytest.raises(ConfigError):
        parse_function_declaration({"type": "Http", "name": "x", "description": "y"})
    with pytest.raises(ConfigError):
        parse_function_declaration({"type": "Shell", "name": "x"})
    with pytest.raises(ConfigError):
        list_function_declarations(tmp_path / "missing")


def test_parse_shell_declaration():
    decl = parse_function_declaration(
        {
            "type": "Shell",
            "name": "cat",
            "description": "print a file",
            "command_template": "cat {path}",
            "parameters": [
                {"name": "path", "param_type": "string", "description": "file", "required": True},
            ],
        }
    )
    assert isinstance(decl, ShellFunction)
    assert generate_command(decl, {"path": "a.txt"}) == "cat a.txt"
