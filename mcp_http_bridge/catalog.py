# -*- coding: utf-8 -*-
"""Tool descriptors. Each server advertises exactly one of these."""

from typing import List

from .config import BridgeConfig
from .models import ToolDescriptor

SEND_MESSAGE = "send_message"
QUERY_TABLE = "query_table"


def send_message_descriptor() -> ToolDescriptor:
    return ToolDescriptor(
        name=SEND_MESSAGE,
        description="Sends a push notification to an ntfy.sh channel.",
        input_schema={
            "type": "object",
            "properties": {
                "channel": {
                    "type": "string",
                    "description": "The ntfy channel (topic) the message is sent to",
                },
                "message": {
                    "type": "string",
                    "description": "The message to send",
                },
                "title": {
                    "type": "string",
                    "description": "Optional, title of the message",
                },
                "priority": {
                    "type": "number",
                    "description": "Optional, priority (1-5, where 5 is the highest)",
                    "minimum": 1,
                    "maximum": 5,
                },
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Optional, tags for the message",
                },
            },
            "required": ["channel", "message"],
        },
    )


def query_table_descriptor(config: BridgeConfig) -> ToolDescriptor:
    default_id = config.table.default_table_id
    table_id = {"type": "string", "description": "Identifier of the table to read records from"}
    if default_id:
        table_id["default"] = default_id

    return ToolDescriptor(
        name=QUERY_TABLE,
        description="Reads records from a table in the tabular database service.",
        input_schema={
            "type": "object",
            "properties": {
                "tableId": table_id,
                "filter": {
                    "type": "string",
                    "description": "Optional, filter expression passed to the service",
                },
                "sort": {
                    "type": "string",
                    "description": "Optional, sort expression passed to the service",
                },
                "limit": {
                    "type": "number",
                    "description": "Optional, maximum number of records to return",
                    "minimum": 1,
                },
            },
            "required": [] if default_id else ["tableId"],
        },
    )


def tool_descriptor(config: BridgeConfig) -> ToolDescriptor:
    if config.tool == "table":
        return query_table_descriptor(config)
    return send_message_descriptor()


def list_tools(config: BridgeConfig) -> List[ToolDescriptor]:
    return [tool_descriptor(config)]
