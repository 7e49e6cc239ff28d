# mcp_discovery/update/document.py
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Tuple

from ..errors import DocumentAccessError
from ..models.options import WriteOptions
from .line_endings import ends_with_line_ending, split_lines
from .markers import scan_markers
from .selector import select_template

logger = logging.getLogger(__name__)


@dataclass
class RenderLocation:
    """Rendered text for one render block, between 1-based marker lines start_line and end_line."""
    start_line: int
    end_line: int
    rendered_template: str

    @property
    def render_location(self) -> Tuple[int, int]:
        return (self.start_line, self.end_line)


@dataclass
class UpdateTemplateInfo:
    content: str
    line_ending: str
    render_locations: List[RenderLocation] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def read_document(filename: Path) -> str:
    # newline="" keeps "\r\n" intact
    try:
        with open(filename, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentAccessError(filename, "read", e) from e


def write_atomically(filename: Path, content: str) -> None:
    """Writes via a temporary file in the same directory, then replaces the target."""
    filename = Path(filename)
    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(filename.parent), prefix=f".{filename.name}.", suffix=".tmp")
    except OSError as e:
        raise DocumentAccessError(filename, "write", e) from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if filename.exists():
            shutil.copymode(filename, tmp_path)
        else:
            # mkstemp creates 0600
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, filename)
    except BaseException as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        if isinstance(e, OSError):
            raise DocumentAccessError(filename, "write", e) from e
        raise


def detect_render_markers(update_options: WriteOptions, server_info: Any) -> UpdateTemplateInfo:
    """Scans the target file and renders every render block.

    All validation happens here; a failure leaves the file untouched.
    """
    update_options.validate()
    content = read_document(update_options.filename)

    scan = scan_markers(content, update_options.filename)

    locations: List[RenderLocation] = []
    for block in scan.blocks:
        template = select_template(update_options, block.props, block.inline_template)
        logger.debug(
            "render block %d-%d uses %s template", block.start_line, block.end_line, template.kind
        )
        locations.append(RenderLocation(
            start_line=block.start_line,
            end_line=block.end_line,
            rendered_template=template.render(server_info),
        ))

    return UpdateTemplateInfo(
        content=content,
        line_ending=scan.line_ending,
        render_locations=locations,
        warnings=list(scan.warnings),
    )


def splice_content(info: UpdateTemplateInfo) -> str:
    """Replaces the interior of each render block, keeping its marker lines.

    Locations are applied back to front so earlier line numbers stay valid.
    """
    lines = split_lines(info.content)
    for location in sorted(info.render_locations, key=lambda loc: loc.start_line, reverse=True):
        lines[location.start_line:location.end_line - 1] = split_lines(location.rendered_template)

    updated = info.line_ending.join(lines)
    if ends_with_line_ending(info.content):
        updated += info.line_ending
    return updated


def update_document(update_options: WriteOptions, server_info: Any) -> UpdateTemplateInfo:
    info = detect_render_markers(update_options, server_info)
    for warning in info.warnings:
        logger.warning(warning)

    write_atomically(update_options.filename, splice_content(info))
    return info
