# mcp_discovery/rendering/helpers.py
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from jinja2 import Environment
from rich.cells import cell_len

from ..models.server_info import ParamType
from ..update.line_endings import line_ending


def boolean_indicator(value: bool) -> str:
    return "✔" if value else "✘"


def plus_one(value: Any) -> str:
    return str(int(value) + 1)


def format_text(text: Optional[str], new_line: Optional[str] = None, code_wrap_chars: Optional[str] = None) -> str:
    """
    Replaces newlines with `new_line` and optionally wraps tokens enclosed in
    delimiter pairs with <code> tags.

    `code_wrap_chars` pairs its first half with its reversed second half, so
    "``" wraps `token` and "`'" wraps `token'. Odd-length values are ignored.
    """
    text = text or ""
    if new_line is None:
        new_line = line_ending(text)

    result = re.sub(r"\r?\n", lambda _m: new_line, text)

    if code_wrap_chars and len(code_wrap_chars) % 2 == 0:
        half = len(code_wrap_chars) // 2
        for left, right in zip(code_wrap_chars[:half], reversed(code_wrap_chars[half:])):
            pattern = f"{re.escape(left)}([\\w\\-_]+){re.escape(right)}"
            result = re.sub(pattern, r"<code>\1</code>", result)
    return result


def capability_tag(label: str, supported: Any, count: Optional[int] = None) -> str:
    if supported:
        count_str = f" ({count})" if count is not None else ""
        return f"{boolean_indicator(True)} {label}{count_str}"
    return f'<span style="opacity:0.6">{boolean_indicator(False)} {label}</span>'


def capability(label: str, supported: Optional[bool] = None, count: Optional[int] = None) -> str:
    supported = bool(supported)
    count_str = f" ({count})" if supported and count is not None else ""
    return f"{boolean_indicator(supported)} {label}{count_str}"


def underline(label: Any) -> str:
    text = label if isinstance(label, str) else ""
    return f"{text}\n{'─' * cell_len(text)}"


def capability_title(label: Optional[str] = None, count: Optional[int] = None, with_underline: Optional[bool] = None) -> str:
    text = f"{label or ''}{f'({count})' if count is not None else ''}"
    if with_underline:
        return f"{text}\n{'─' * cell_len(text)}"
    return text


def _python_replacement(replacer: str) -> str:
    # $1 / ${1} / ${name} -> \g<1> / \g<name>
    return re.sub(r"\$\{?(\w+)\}?", r"\\g<\1>", replacer.replace("\\", "\\\\"))


def replace_regex(label: Optional[str], pattern: str, replacer: str) -> str:
    return re.sub(pattern, _python_replacement(replacer), label or "")


def tool_param_type(param_type: Any) -> str:
    if isinstance(param_type, ParamType):
        return str(param_type)
    if isinstance(param_type, dict):
        return str(ParamType.from_dict(param_type))
    return "" if param_type is None else str(param_type)


def json_helper(data: Dict[str, Any], pretty: bool = False) -> str:
    try:
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError):
        return "/* failed to serialize */"


HELPERS = {
    "plus_one": plus_one,
    "underline": underline,
    "format_text": format_text,
    "capability_tag": capability_tag,
    "capability": capability,
    "capability_title": capability_title,
    "replace_regex": replace_regex,
    "tool_param_type": tool_param_type,
}


def register_helpers(env: Environment) -> None:
    """Registers every helper both as a global function and as a filter."""
    for name, helper in HELPERS.items():
        env.globals[name] = helper
        env.filters[name] = helper
