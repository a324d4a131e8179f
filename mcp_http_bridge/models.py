# -*- coding: utf-8 -*-
"""
Data model shared by the catalog, validator, call builder and dispatcher.

All of these live for a single invocation at most; descriptors are built once
per configuration and never mutated.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, confloat, conint


class ToolDescriptor(BaseModel):
    """Static metadata advertised for the one tool a server exposes."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: Dict[str, Any]

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    @property
    def properties(self) -> Dict[str, Dict[str, Any]]:
        return self.input_schema.get("properties", {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolInvocationRequest(BaseModel):
    tool_name: str
    arguments: Any = None


# -----------------------------------------------------------------------------
# Validated (typed) argument records
# -----------------------------------------------------------------------------
class SendMessageArgs(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: StrictStr
    message: StrictStr
    title: Optional[StrictStr] = None
    priority: Optional[
        Union[conint(strict=True, ge=1, le=5), confloat(strict=True, ge=1, le=5)]
    ] = None
    tags: Optional[List[StrictStr]] = None


class QueryTableArgs(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    table_id: StrictStr = Field(alias="tableId")
    filter: Optional[StrictStr] = None
    sort: Optional[StrictStr] = None
    limit: Optional[Union[conint(strict=True, ge=1), confloat(strict=True, ge=1)]] = None


class RemoteCallSpec(BaseModel):
    """Fully resolved outbound HTTP request."""

    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"]
    url: str
    params: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


# -----------------------------------------------------------------------------
# Result envelope
# -----------------------------------------------------------------------------
class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    content: List[TextBlock]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextBlock(text=text)], is_error=is_error)

    def to_dict(self) -> Dict[str, Any]:
        """MCP wire shape: isError is only emitted when set."""
        out: Dict[str, Any] = {"content": [b.model_dump() for b in self.content]}
        if self.is_error:
            out["isError"] = True
        return out
