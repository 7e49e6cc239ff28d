# mcp_discovery/rendering/engine.py
from __future__ import annotations

import logging
import re
from functools import partial
from typing import Any, Dict

from jinja2 import DictLoader, Environment, TemplateError

from ..errors import RenderError
from .helpers import json_helper, register_helpers
from .templates import PARTIALS

logger = logging.getLogger(__name__)


def register_partials(env: Environment) -> None:
    env.loader = DictLoader(dict(PARTIALS))


def create_environment() -> Environment:
    env = Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    register_helpers(env)
    register_partials(env)
    return env


def _as_context(data: Any) -> Dict[str, Any]:
    if hasattr(data, "as_dict"):
        return data.as_dict()
    return dict(data or {})


def render_template(template_content: str, data: Any) -> str:
    """Renders a template string against `data` (an object with as_dict() or a mapping)."""
    env = create_environment()
    context = _as_context(data)
    env.globals["json"] = partial(json_helper, context)

    try:
        template = env.from_string(template_content)
        return template.render(context)
    except (TemplateError, ValueError, TypeError, re.error) as e:
        lineno = getattr(e, "lineno", None)
        where = f" (line {lineno})" if lineno else ""
        logger.debug("template rendering failed%s: %s", where, e)
        raise RenderError(f"Failed to render template{where}: {e}") from e
