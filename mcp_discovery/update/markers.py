# mcp_discovery/update/markers.py
"""
Scanner for render/template markers embedded in a document.

    mcp-discovery-render [template=<name>] [template-file=<path>]
    mcp-discovery-template
    ...inline template body...
    mcp-discovery-template-end
    ...replaced on every update...
    mcp-discovery-render-end

Markers can sit inside any comment syntax; only the tag words matter. The
scan is a single pass over every marker match in document order, driven by
a three-state machine (idle / in render / in render with open template).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..errors import AmbiguousTemplateSourceError, MarkerNestingError
from ..models.options import Template
from ..rendering.output_template import InlineTemplateInfo
from .line_endings import line_ending, split_lines

MCP_DISCOVERY_TEMPLATE_START = "mcp-discovery-template"
MCP_DISCOVERY_TEMPLATE_END = "mcp-discovery-template-end"
MCP_DISCOVERY_RENDER_START = "mcp-discovery-render"
MCP_DISCOVERY_RENDER_END = "mcp-discovery-render-end"

MARKER_RE = re.compile(r"\bmcp-discovery(-template|-render)(-end)?(?!\w|-\w)")
TEMPLATE_FILE_RE = re.compile(r"(template-file=)((?:\.|~)*[\.\w\s/-]+)(?:\s|$|-->|\*/)")
TEMPLATE_RE = re.compile(r"(template=)([\w\-\d\-]+)(\s|$)")


@dataclass
class RenderTemplateProps:
    """Attributes parsed from a render start marker line.

    `mcp-discovery-render template-file=./custom.j2` gives
    template_file=Path("./custom.j2"), template=None.
    """
    template_file: Optional[Path] = None
    template: Optional[Template] = None


def extract_template_file(line: str) -> Optional[str]:
    m = TEMPLATE_FILE_RE.search(line)
    if not m:
        return None
    return m.group(2).strip()


def _template_prop_value(line: str) -> Optional[str]:
    m = TEMPLATE_RE.search(line)
    if not m:
        return None
    return m.group(2).strip()


def extract_template_prop(line: str) -> Optional[Template]:
    """Built-in template named by `template=`; unknown names give None."""
    return Template.parse(_template_prop_value(line))


def extract_render_props(line: str) -> RenderTemplateProps:
    template_file = extract_template_file(line)
    return RenderTemplateProps(
        template_file=Path(template_file) if template_file else None,
        template=extract_template_prop(line),
    )


class ScanState(Enum):
    IDLE = "idle"
    IN_RENDER = "in_render"
    IN_RENDER_WITH_TEMPLATE = "in_render_with_template"


@dataclass
class RenderBlock:
    """One closed render section: 1-based marker lines plus its template sources."""
    start_line: int
    end_line: int
    props: RenderTemplateProps
    inline_template: Optional[InlineTemplateInfo] = None


@dataclass
class ScanResult:
    line_ending: str
    blocks: List[RenderBlock] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class _Scanner:
    def __init__(self, content: str, filename: Path):
        self.content = content
        self.filename = filename
        self.lines = split_lines(content)
        self.result = ScanResult(line_ending=line_ending(content))

        self.state = ScanState.IDLE
        self.render_start: Optional[int] = None
        self.template_start: Optional[int] = None
        self.props = RenderTemplateProps()
        self.inline: Optional[InlineTemplateInfo] = None
        self.inline_start: Optional[int] = None

    def _line(self, line_number: int) -> str:
        if 0 < line_number <= len(self.lines):
            return self.lines[line_number - 1]
        return ""

    def _fail(self, message: str) -> MarkerNestingError:
        return MarkerNestingError(message)

    def _warn(self, message: str) -> None:
        self.result.warnings.append(message)

    # ---- transitions ---------------------------------------------------------

    def render_start_marker(self, line_number: int) -> None:
        if self.state is not ScanState.IDLE:
            raise self._fail(
                f"Duplicate render start marker '{MCP_DISCOVERY_RENDER_START}' found at line {line_number} "
                f"in '{self.filename}'. Remove the extra marker to define a single render section."
            )
        line = self._line(line_number)
        self.props = extract_render_props(line)
        raw = _template_prop_value(line)
        if raw is not None and self.props.template is None:
            self._warn(
                f"Unknown template '{raw}' in render marker at line {line_number} in '{self.filename}' "
                f"was ignored. Valid values are: {', '.join(t.value for t in Template)}."
            )
        self.render_start = line_number
        self.inline = None
        self.state = ScanState.IN_RENDER

    def template_start_marker(self, line_number: int) -> None:
        if self.state is ScanState.IN_RENDER_WITH_TEMPLATE:
            raise self._fail(
                f"Duplicate template start marker '{MCP_DISCOVERY_TEMPLATE_START}' found at line {line_number} "
                f"in '{self.filename}'. Ensure each template section has a single start marker."
            )
        if self.state is ScanState.IDLE:
            raise self._fail(
                f"Template start marker '{MCP_DISCOVERY_TEMPLATE_START}' at line {line_number} in "
                f"'{self.filename}' is outside a render section. Ensure it is enclosed within "
                f"'{MCP_DISCOVERY_RENDER_START}' and '{MCP_DISCOVERY_RENDER_END}' markers."
            )
        if line_number == self.render_start:
            raise self._fail(
                f"Template start marker '{MCP_DISCOVERY_TEMPLATE_START}' at line {line_number} in "
                f"'{self.filename}' shares a line with its render start marker. Put each marker on its own line."
            )
        self.template_start = line_number
        self.state = ScanState.IN_RENDER_WITH_TEMPLATE

    def template_end_marker(self, line_number: int) -> None:
        if self.state is ScanState.IDLE:
            raise self._fail(
                f"Template end marker '{MCP_DISCOVERY_TEMPLATE_END}' at line {line_number} in "
                f"'{self.filename}' is outside a render section. Ensure it is enclosed within "
                f"'{MCP_DISCOVERY_RENDER_START}' and '{MCP_DISCOVERY_RENDER_END}' markers."
            )
        if self.state is ScanState.IN_RENDER:
            raise self._fail(
                f"Template end marker '{MCP_DISCOVERY_TEMPLATE_END}' at line {line_number} in "
                f"'{self.filename}' has no matching start marker '{MCP_DISCOVERY_TEMPLATE_START}'. "
                f"Add a corresponding start marker before this line."
            )
        start = self.template_start
        if line_number == start:
            raise self._fail(
                f"Template end marker '{MCP_DISCOVERY_TEMPLATE_END}' at line {line_number} in "
                f"'{self.filename}' shares a line with its start marker. Put each marker on its own line."
            )

        if self.inline is not None:
            self._warn(
                f"Template section starting at line {self.inline_start} in '{self.filename}' was ignored "
                f"because it was not followed by a render section. Ensure it is within a valid render block."
            )

        # lines strictly between the two marker lines
        body = self.result.line_ending.join(self.lines[start:line_number - 1])
        self.inline = InlineTemplateInfo(
            template=body,
            marker_start=self._line(start),
            marker_end=self._line(line_number),
        )
        self.inline_start = start
        self.template_start = None
        self.state = ScanState.IN_RENDER

    def render_end_marker(self, line_number: int) -> None:
        if self.state is ScanState.IDLE:
            raise self._fail(
                f"Render end marker '{MCP_DISCOVERY_RENDER_END}' at line {line_number} in "
                f"'{self.filename}' has no matching start marker '{MCP_DISCOVERY_RENDER_START}'. "
                f"Add a corresponding start marker before this line."
            )
        if self.state is ScanState.IN_RENDER_WITH_TEMPLATE:
            raise self._fail(
                f"Render end marker '{MCP_DISCOVERY_RENDER_END}' at line {line_number} in "
                f"'{self.filename}' is inside a template section. Close the template section with "
                f"'{MCP_DISCOVERY_TEMPLATE_END}' before this marker."
            )
        if line_number == self.render_start:
            raise self._fail(
                f"Render end marker '{MCP_DISCOVERY_RENDER_END}' at line {line_number} in "
                f"'{self.filename}' shares a line with its start marker. Put each marker on its own line."
            )

        self._check_single_source(line_number)

        self.result.blocks.append(RenderBlock(
            start_line=self.render_start,
            end_line=line_number,
            props=self.props,
            inline_template=self.inline,
        ))
        self.render_start = None
        self.props = RenderTemplateProps()
        self.inline = None
        self.inline_start = None
        self.state = ScanState.IDLE

    def _check_single_source(self, line_number: int) -> None:
        props = self.props
        where = f"Render section ending at line {line_number} in '{self.filename}'"
        hint = "Choose one template source for this render block."
        if props.template_file is not None and self.inline is not None:
            raise AmbiguousTemplateSourceError(
                f"{where} specifies both a 'template-file' and an inline template. {hint}"
            )
        if props.template is not None and self.inline is not None:
            raise AmbiguousTemplateSourceError(
                f"{where} specifies both a 'template' and an inline template. {hint}"
            )
        if props.template_file is not None and props.template is not None:
            raise AmbiguousTemplateSourceError(
                f"{where} specifies both a 'template-file' and 'template'. {hint}"
            )

    def finish(self) -> ScanResult:
        if self.state is not ScanState.IDLE:
            raise self._fail(
                f"Render section starting at line {self.render_start} in '{self.filename}' has no end marker "
                f"'{MCP_DISCOVERY_RENDER_END}'. Close it before the end of the file."
            )
        return self.result

    def run(self) -> ScanResult:
        handlers = {
            MCP_DISCOVERY_RENDER_START: self.render_start_marker,
            MCP_DISCOVERY_RENDER_END: self.render_end_marker,
            MCP_DISCOVERY_TEMPLATE_START: self.template_start_marker,
            MCP_DISCOVERY_TEMPLATE_END: self.template_end_marker,
        }
        line_number = 1
        last_pos = 0
        for m in MARKER_RE.finditer(self.content):
            handler = handlers.get(m.group(0))
            if handler is None:
                continue
            line_number += self.content.count("\n", last_pos, m.start())
            last_pos = m.start()
            handler(line_number)
        return self.finish()


def scan_markers(content: str, filename: Path) -> ScanResult:
    """Validates marker nesting and collects every render block in `content`.

    Raises MarkerNestingError or AmbiguousTemplateSourceError; nothing is
    rendered or written here.
    """
    return _Scanner(content, Path(filename)).run()
