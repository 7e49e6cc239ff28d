# mcp_discovery/errors.py
from __future__ import annotations


class DiscoveryError(Exception):
    """Base error for everything the discovery workflow can fail with.

    Every subclass carries a human readable message; the CLI prints it as
    ``Error: <message>`` and exits with status 1.
    """


class ServerNotInitializedError(DiscoveryError):
    def __init__(self, message: str = "The MCP Server failed to initialize successfully."):
        super().__init__(message)


class ServerLaunchError(DiscoveryError):
    pass


class NotDiscoveredError(DiscoveryError):
    def __init__(self, message: str = (
        "Server details are not available. please ensure the discover() method is called first."
    )):
        super().__init__(message)


class InvalidSchemaError(DiscoveryError):
    pass


class InvalidTemplateError(DiscoveryError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a valid template. Valid values are: md, md-plain, html, txt")
        self.name = name


class MarkerNestingError(DiscoveryError):
    pass


class AmbiguousTemplateSourceError(DiscoveryError):
    pass


class TemplateFileNotFoundError(DiscoveryError):
    def __init__(self, attempted: list):
        paths = "\n".join(str(p) for p in attempted)
        super().__init__(f"Template file not found in any of these paths:\n{paths}")
        self.attempted = list(attempted)


class TargetFileNotFoundError(DiscoveryError):
    def __init__(self, filename):
        super().__init__(f"File '{filename}' not found")
        self.filename = filename


class DocumentAccessError(DiscoveryError):
    def __init__(self, filename, action: str, reason):
        super().__init__(f"Unable to {action} file '{filename}': {reason}")
        self.filename = filename


class RenderError(DiscoveryError):
    pass
