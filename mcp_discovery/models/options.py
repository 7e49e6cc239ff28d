# mcp_discovery/models/options.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from ..errors import InvalidTemplateError, TargetFileNotFoundError


class Template(str, Enum):
    """Built-in output templates, selectable by name."""
    MD = "md"
    MD_PLAIN = "md-plain"
    HTML = "html"
    TXT = "txt"

    @classmethod
    def from_name(cls, name: str) -> "Template":
        for t in cls:
            if t.value == name:
                return t
        raise InvalidTemplateError(name)

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["Template"]:
        """Like from_name, but returns None for unknown or empty names."""
        if not name:
            return None
        try:
            return cls.from_name(name)
        except InvalidTemplateError:
            return None


@dataclass
class PrintOptions:
    mcp_server_cmd: List[str]
    template: Optional[Template] = None
    template_file: Optional[Path] = None
    template_string: Optional[str] = None
    log_level: Optional[str] = None
    json: bool = False

    def has_template(self) -> bool:
        return any(v is not None for v in (self.template, self.template_file, self.template_string))


@dataclass
class WriteOptions:
    filename: Path
    mcp_server_cmd: List[str] = field(default_factory=list)
    template: Optional[Template] = None
    template_file: Optional[Path] = None
    template_string: Optional[str] = None
    log_level: Optional[str] = None

    def __post_init__(self):
        self.filename = Path(self.filename)
        if self.template_file is not None:
            self.template_file = Path(self.template_file)

    def validate(self) -> None:
        if not self.filename.exists():
            raise TargetFileNotFoundError(self.filename)


@dataclass
class DiscoveryCommand:
    """What to do once the server has been discovered.

    action is "print", "create" or "update"; create and update carry
    WriteOptions, print carries PrintOptions.
    """
    action: str
    options: Union[PrintOptions, WriteOptions]

    @property
    def mcp_launch_command(self) -> List[str]:
        return self.options.mcp_server_cmd

    @property
    def log_level(self) -> Optional[str]:
        return self.options.log_level
