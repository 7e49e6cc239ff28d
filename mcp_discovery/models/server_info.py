# mcp_discovery/models/server_info.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class McpCapabilities:
    tools: bool = False
    prompts: bool = False
    resources: bool = False
    logging: bool = False
    experimental: bool = False

    def __str__(self) -> str:
        return (
            f"tools:{self.tools}, prompts:{self.prompts}, resources:{self.resources}, "
            f"logging:{self.logging}, experimental:{self.experimental}"
        ).lower()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "tools": self.tools,
            "prompts": self.prompts,
            "resources": self.resources,
            "logging": self.logging,
            "experimental": self.experimental,
        }


@dataclass
class ParamType:
    """Decoded type of a tool parameter.

    kind is one of:
      - "primitive": a JSON schema scalar type, stored in `name`
      - "object":    nested parameters, stored in `params`
      - "array":     a single item type, stored in `items[0]`
      - "union":     anyOf/oneOf members, stored in `items`
    """
    kind: str
    name: str = ""
    params: List["McpToolParam"] = field(default_factory=list)
    items: List["ParamType"] = field(default_factory=list)

    @classmethod
    def primitive(cls, name: str) -> "ParamType":
        return cls(kind="primitive", name=name)

    @classmethod
    def object(cls, params: List["McpToolParam"]) -> "ParamType":
        return cls(kind="object", params=list(params))

    @classmethod
    def array(cls, item: "ParamType") -> "ParamType":
        return cls(kind="array", items=[item])

    @classmethod
    def union(cls, members: List["ParamType"]) -> "ParamType":
        return cls(kind="union", items=list(members))

    def __str__(self) -> str:
        if self.kind == "object":
            inner = ", ".join(f"{p.param_name} : {p.param_type}" for p in self.params)
            return "{" + inner + "}"
        if self.kind == "array":
            return f"{self.items[0]} [ ]" if self.items else "any [ ]"
        if self.kind == "union":
            return " | ".join(str(m) for m in self.items)
        return self.name

    def as_dict(self) -> Dict[str, Any]:
        if self.kind == "object":
            return {"object": [p.as_dict() for p in self.params]}
        if self.kind == "array":
            return {"array": [i.as_dict() for i in self.items]}
        if self.kind == "union":
            return {"union": [i.as_dict() for i in self.items]}
        return {"primitive": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParamType":
        if "object" in data:
            return cls.object([McpToolParam.from_dict(p) for p in data["object"]])
        if "array" in data:
            items = [cls.from_dict(i) for i in data["array"]]
            return cls(kind="array", items=items)
        if "union" in data:
            return cls.union([cls.from_dict(i) for i in data["union"]])
        return cls.primitive(str(data.get("primitive", "")))


@dataclass
class McpToolParam:
    param_name: str
    param_type: ParamType
    param_description: Optional[str] = None
    required: bool = False

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "param_name": self.param_name,
            "param_type": self.param_type.as_dict(),
            "required": self.required,
        }
        if self.param_description is not None:
            out["param_description"] = self.param_description
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "McpToolParam":
        return cls(
            param_name=data.get("param_name", ""),
            param_type=ParamType.from_dict(data.get("param_type") or {}),
            param_description=data.get("param_description"),
            required=bool(data.get("required", False)),
        )


@dataclass
class McpToolMeta:
    name: str
    description: Optional[str] = None
    params: List[McpToolParam] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            out["description"] = self.description
        out["params"] = [p.as_dict() for p in self.params]
        return out


@dataclass
class McpPromptArgument:
    name: str
    description: Optional[str] = None
    required: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": self.required}


@dataclass
class McpPrompt:
    name: str
    description: Optional[str] = None
    arguments: List[McpPromptArgument] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [a.as_dict() for a in self.arguments],
        }


@dataclass
class McpResource:
    name: str
    uri: str
    description: Optional[str] = None
    mime_type: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "uri": self.uri,
            "description": self.description,
            "mime_type": self.mime_type,
        }


@dataclass
class McpResourceTemplate:
    name: str
    uri_template: str
    description: Optional[str] = None
    mime_type: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "uri_template": self.uri_template,
            "description": self.description,
            "mime_type": self.mime_type,
        }


@dataclass
class McpServerInfo:
    """Everything discovered about one MCP server.

    The optional lists are None when the server does not advertise the
    matching capability, and are then left out of `as_dict()` entirely so
    templates can test for them with a plain `{% if tools %}`.
    """
    name: str
    version: str
    capabilities: McpCapabilities = field(default_factory=McpCapabilities)
    tools: Optional[List[McpToolMeta]] = None
    prompts: Optional[List[McpPrompt]] = None
    resources: Optional[List[McpResource]] = None
    resource_templates: Optional[List[McpResourceTemplate]] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "capabilities": self.capabilities.as_dict(),
        }
        if self.tools is not None:
            out["tools"] = [t.as_dict() for t in self.tools]
        if self.prompts is not None:
            out["prompts"] = [p.as_dict() for p in self.prompts]
        if self.resources is not None:
            out["resources"] = [r.as_dict() for r in self.resources]
        if self.resource_templates is not None:
            out["resource_templates"] = [r.as_dict() for r in self.resource_templates]
        return out
