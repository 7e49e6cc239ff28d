# mcp_discovery/update/selector.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from ..models.options import Template, WriteOptions
from ..rendering.output_template import InlineTemplateInfo, OutputTemplate
from .markers import RenderTemplateProps

MARKDOWN_EXTENSIONS = {"md", "markdown", "mdown", "mkd", "mdtxt", "mdtext"}
HTML_EXTENSIONS = {"htm", "html"}


def template_for_extension(filename: Path) -> OutputTemplate:
    """Built-in template matching the file extension; plain text by default."""
    extension = Path(filename).suffix.lstrip(".").lower()
    if extension in MARKDOWN_EXTENSIONS:
        return OutputTemplate.builtin(Template.MD)
    if extension in HTML_EXTENSIONS:
        return OutputTemplate.builtin(Template.HTML)
    return OutputTemplate.builtin(Template.TXT)


def match_template(
    filename: Optional[Path],
    template: Optional[Template] = None,
    template_file: Optional[Path] = None,
    template_string: Optional[str] = None,
) -> OutputTemplate:
    """Template for create/print: explicit options first, then the file extension.

    With no filename (print) and no explicit option the result is
    OutputTemplate.none(), meaning "print the terminal summary".
    """
    if template_file is not None:
        return OutputTemplate.from_file(template_file, filename)
    if template is not None:
        return OutputTemplate.builtin(template)
    if template_string is not None:
        return OutputTemplate.from_string(template_string)
    if filename is not None:
        return template_for_extension(filename)
    return OutputTemplate.none()


def select_template(
    update_options: WriteOptions,
    rendering_props: RenderTemplateProps,
    inline_template: Optional[InlineTemplateInfo] = None,
) -> OutputTemplate:
    """Template for one render block of an update.

    Candidates are tried in order and the first that yields a template wins:
      1. template file (CLI option, then the block's template-file=)
      2. built-in template (CLI option, then the block's template=)
      3. inline template captured inside the block
      4. template string from the CLI
      5. built-in template matching the target file extension
    """
    filename = update_options.filename

    def from_template_file() -> Optional[OutputTemplate]:
        template_file = update_options.template_file or rendering_props.template_file
        if template_file is None:
            return None
        return OutputTemplate.from_file(template_file, filename)

    def from_template_name() -> Optional[OutputTemplate]:
        template = update_options.template or rendering_props.template
        return OutputTemplate.builtin(template) if template is not None else None

    def from_template_string() -> Optional[OutputTemplate]:
        if update_options.template_string is None:
            return None
        return OutputTemplate.from_string(update_options.template_string)

    def from_inline() -> Optional[OutputTemplate]:
        return OutputTemplate.from_inline(inline_template) if inline_template is not None else None

    candidates: List[Callable[[], Optional[OutputTemplate]]] = [
        from_template_file,
        from_template_name,
        from_inline,
        from_template_string,
    ]
    for candidate in candidates:
        selected = candidate()
        if selected is not None:
            return selected
    return template_for_extension(filename)
