# mcp_discovery/rendering/output_template.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from ..errors import TemplateFileNotFoundError
from ..models.options import Template
from ..update.line_endings import line_ending
from .engine import render_template
from .templates import TEMPLATE_HTML, TEMPLATE_MARKDOWN, TEMPLATE_MARKDOWN_PLAIN, TEMPLATE_TEXT

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES = {
    Template.MD: TEMPLATE_MARKDOWN,
    Template.MD_PLAIN: TEMPLATE_MARKDOWN_PLAIN,
    Template.HTML: TEMPLATE_HTML,
    Template.TXT: TEMPLATE_TEXT,
}


@dataclass
class InlineTemplateInfo:
    """A template body captured between template markers in a document.

    marker_start and marker_end are the original marker lines, kept verbatim
    so the rendered block can re-emit them.
    """
    template: str
    marker_start: str
    marker_end: str


def template_file_candidates(template_file: Path, base_file: Optional[Path] = None) -> List[Path]:
    """Paths to try for a template file, most preferred first.

    1. relative to the directory of `base_file` (the document being written)
    2. as given, i.e. relative to the working directory
    """
    template_file = Path(os.path.expanduser(str(template_file)))
    candidates: List[Path] = []
    if base_file is not None:
        base_dir = Path(base_file).parent
        relative = Path(os.path.normpath(Path.cwd() / base_dir / template_file))
        candidates.append(relative)
    if template_file not in candidates:
        candidates.append(template_file)
    return candidates


def find_template_file(template_file: Path, base_file: Optional[Path] = None) -> Path:
    candidates = template_file_candidates(template_file, base_file)
    for candidate in candidates:
        if candidate.exists():
            logger.debug("using template file %s", candidate)
            return candidate
    raise TemplateFileNotFoundError(candidates)


@dataclass
class OutputTemplate:
    """The template chosen for one rendering.

    kind is a built-in Template value ("md", "md-plain", "html", "txt") or one
    of "file", "string", "inline", "none" ("none" means print the terminal
    summary instead of rendering).
    """
    kind: str
    path: Optional[Path] = None
    text: Optional[str] = None
    inline: Optional[InlineTemplateInfo] = None

    @classmethod
    def builtin(cls, template: Template) -> "OutputTemplate":
        return cls(kind=Template(template).value)

    @classmethod
    def from_file(cls, template_file: Path, base_file: Optional[Path] = None) -> "OutputTemplate":
        return cls(kind="file", path=find_template_file(Path(template_file), base_file))

    @classmethod
    def from_string(cls, text: str) -> "OutputTemplate":
        return cls(kind="string", text=text)

    @classmethod
    def from_inline(cls, info: InlineTemplateInfo) -> "OutputTemplate":
        return cls(kind="inline", inline=info)

    @classmethod
    def none(cls) -> "OutputTemplate":
        return cls(kind="none")

    @property
    def is_none(self) -> bool:
        return self.kind == "none"

    def content(self) -> str:
        builtin = Template.parse(self.kind)
        if builtin is not None:
            return BUILTIN_TEMPLATES[builtin]
        if self.kind == "file":
            try:
                return self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                # soft fail: keep the rest of the document intact
                logger.warning("could not read template file '%s': %s", self.path, e)
                return f">> ERROR LOADING TEMPLATE FILE : '{self.path}' <<"
        if self.kind == "string":
            return self.text or ""
        if self.kind == "inline":
            return self.inline.template
        return ""

    def _inline_header(self) -> str:
        info = self.inline
        le = line_ending(info.template)
        if not info.template:
            return f"{info.marker_start}{le}{info.marker_end}{le}"
        return f"{info.marker_start}{le}{info.template}{le}{info.marker_end}{le}"

    def render(self, server_info: Any) -> str:
        """Renders against server_info; inline templates are prefixed with their own markers."""
        rendered = render_template(self.content(), server_info)
        if self.kind == "inline":
            return self._inline_header() + rendered
        return rendered
