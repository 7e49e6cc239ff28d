# mcp_discovery/mcp_tools/schema.py
"""
Decodes a tool's JSON input schema into a tree of ParamType values.

Only the parts of JSON schema that MCP servers commonly emit are understood:
scalar "type", "object" with "properties"/"required", "array" with "items",
and anyOf/oneOf unions (pydantic renders Optional[X] that way).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import InvalidSchemaError
from ..models.server_info import McpToolParam, ParamType


def _description(schema: Dict[str, Any]) -> Optional[str]:
    value = schema.get("description")
    return value if isinstance(value, str) else None


def get_param_object(object_map: Dict[str, Any]) -> List[McpToolParam]:
    """Parses an object schema's properties into a list of McpToolParam."""
    properties = object_map.get("properties")
    if not isinstance(properties, dict):
        raise InvalidSchemaError("Missing or invalid 'properties' field")

    required = object_map.get("required")
    required_names = [r for r in required if isinstance(r, str)] if isinstance(required, list) else []

    params: List[McpToolParam] = []
    for param_name, param_value in properties.items():
        if not isinstance(param_value, dict):
            raise InvalidSchemaError(f"Property '{param_name}' is not an object")
        params.append(McpToolParam(
            param_name=param_name,
            param_type=get_param_type(param_value),
            param_description=_description(param_value),
            required=param_name in required_names,
        ))
    return params


def get_param_type(type_info: Dict[str, Any]) -> ParamType:
    """Determines the parameter type from a schema definition."""
    type_name = type_info.get("type")

    # "type": ["string", "null"]
    if isinstance(type_name, list):
        members = [ParamType.primitive(str(t)) for t in type_name]
        return members[0] if len(members) == 1 else ParamType.union(members)

    if not isinstance(type_name, str):
        for key in ("anyOf", "oneOf"):
            options = type_info.get(key)
            if isinstance(options, list) and options:
                return ParamType.union([get_param_type(o) for o in options if isinstance(o, dict)])
        raise InvalidSchemaError("Missing or invalid 'type' field")

    if type_name == "array":
        items_map = type_info.get("items")
        if not isinstance(items_map, dict):
            raise InvalidSchemaError("Missing or invalid 'items' field in array type")
        return ParamType.array(get_param_type(items_map))

    if type_name == "object":
        # free-form objects ({"type": "object"} with no properties) stay primitive
        if "properties" not in type_info:
            return ParamType.primitive("object")
        return ParamType.object(get_param_object(type_info))

    return ParamType.primitive(type_name)


def tool_params(input_schema: Optional[Dict[str, Any]]) -> List[McpToolParam]:
    """Top-level tool parameters, sorted by name."""
    if not input_schema:
        return []
    properties = input_schema.get("properties")
    if not properties:
        return []
    params = get_param_object(input_schema)
    params.sort(key=lambda p: p.param_name)
    return params
