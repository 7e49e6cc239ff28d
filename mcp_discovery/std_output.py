# mcp_discovery/std_output.py
from __future__ import annotations

import json
import math
from typing import IO, List, Tuple, Union

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from .models.server_info import McpServerInfo
from .rendering.helpers import boolean_indicator

SUMMARY_HEADER_SIZE = 44


def _console(w: IO[str]) -> Console:
    return Console(file=w, highlight=False, soft_wrap=True, emoji=False)


def table_top(width: int) -> str:
    return f"┌{'─' * width}┐"


def table_bottom(width: int) -> str:
    return f"└{'─' * width}┘"


def table_content(width: int, content: Union[str, Text]) -> Text:
    """A table row with `content` centered between the borders."""
    text = content if isinstance(content, Text) else Text(content)
    content_len = cell_len(text.plain)
    l_pad = max(math.floor(width / 2 - content_len / 2), 0)
    r_pad = max(width - l_pad - content_len, 0)
    return Text.assemble("│", " " * l_pad, text, " " * r_pad, "│")


def print_list(w: IO[str], list_items: List[Tuple[str, Union[str, Text]]]) -> None:
    """Prints `index. key: value` entries, each followed by a blank line."""
    console = _console(w)
    for index, (key, val) in enumerate(list_items, start=1):
        console.print(Text.assemble(
            (f"{index}", "bold cyan"), ". ", (key, "bold cyan"), ": ", val, "\n",
        ))


def print_header(w: IO[str], title: Union[str, Text], table_size: int) -> None:
    console = _console(w)
    console.print(table_top(table_size))
    console.print(table_content(table_size, title))
    console.print(table_bottom(table_size))


def print_json(w: IO[str], server_info: McpServerInfo) -> None:
    w.write(json.dumps(server_info.as_dict(), ensure_ascii=False) + "\n")


def print_summary(w: IO[str], server_info: McpServerInfo) -> int:
    """Prints the boxed server summary and returns the table width used."""
    console = _console(w)
    server_name = f"{server_info.name} {server_info.version}"
    table_size = max(SUMMARY_HEADER_SIZE, cell_len(server_name) + 4)

    caps = server_info.capabilities
    lines = [
        f"{boolean_indicator(caps.tools)} Tools    "
        f"{boolean_indicator(caps.prompts)} Prompts    "
        f"{boolean_indicator(caps.resources)} Resources",
        f"{boolean_indicator(caps.logging)} Logging  "
        f"{boolean_indicator(caps.experimental)} Experimental",
    ]
    adjust = max(cell_len(lines[0]) - cell_len(lines[1]), 0)

    console.print(table_top(table_size))
    console.print(table_content(table_size, Text(server_name, style="bold cyan")))
    console.print(table_content(table_size, ""))
    console.print(table_content(table_size, lines[0]))
    console.print(table_content(table_size, lines[1] + " " * adjust))
    console.print(table_bottom(table_size))
    return table_size


def _with_details(uri: str, mime_type, description) -> Text:
    text = Text(uri)
    if mime_type:
        text.append(f" ({mime_type})", style="dim")
    if description:
        text.append(f"\n{description}", style="dim")
    return text


def print_server_details(w: IO[str], server_info: McpServerInfo) -> None:
    """Summary box followed by one numbered section per capability list."""
    table_size = print_summary(w, server_info)

    if server_info.tools:
        print_header(w, Text.assemble(("Tools", "bold"), f"({len(server_info.tools)})"), table_size)
        tool_list = sorted(
            ((t.name, t.description or "") for t in server_info.tools),
            key=lambda item: item[0],
        )
        print_list(w, tool_list)

    if server_info.prompts:
        print_header(w, Text.assemble(("Prompts", "bold"), f"({len(server_info.prompts)})"), table_size)
        print_list(w, [(p.name, p.description or "") for p in server_info.prompts])

    if server_info.resources:
        print_header(w, Text.assemble(("Resources", "bold"), f"({len(server_info.resources)})"), table_size)
        print_list(w, [
            (r.name, _with_details(r.uri, r.mime_type, r.description)) for r in server_info.resources
        ])

    if server_info.resource_templates:
        print_header(
            w,
            Text.assemble(("Resource Templates", "bold"), f"({len(server_info.resource_templates)})"),
            table_size,
        )
        print_list(w, [
            (r.name, _with_details(r.uri_template, r.mime_type, r.description))
            for r in server_info.resource_templates
        ])
