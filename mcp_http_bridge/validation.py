# -*- coding: utf-8 -*-
"""
Argument validation against a ToolDescriptor.

Rules, applied in order:
1. arguments must be a mapping
2. every required field must be present (None counts as absent)
3. every present field must match its declared type and numeric bounds
4. otherwise produce the tool's typed argument record

Step 3 is the pydantic argument record itself (strict types, ge/le bounds);
schema defaults (e.g. a configured tableId) fill absent fields first.
validate() never raises on bad input; it returns Valid or Invalid.
"""

from typing import Any, Dict, Mapping, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .catalog import QUERY_TABLE, SEND_MESSAGE
from .models import QueryTableArgs, SendMessageArgs, ToolDescriptor

ValidatedArguments = Union[SendMessageArgs, QueryTableArgs]

ARGUMENT_RECORDS: Dict[str, Type[BaseModel]] = {
    SEND_MESSAGE: SendMessageArgs,
    QUERY_TABLE: QueryTableArgs,
}


class Valid(BaseModel):
    model_config = ConfigDict(frozen=True)

    args: ValidatedArguments


class Invalid(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str


ValidationResult = Union[Valid, Invalid]


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"'{loc}': {first['msg']}" if loc else first["msg"]


def validate(descriptor: ToolDescriptor, raw_arguments: Any) -> ValidationResult:
    record = ARGUMENT_RECORDS.get(descriptor.name)
    if record is None:
        return Invalid(reason=f"no argument record for tool '{descriptor.name}'")

    if not isinstance(raw_arguments, Mapping):
        return Invalid(reason="arguments must be an object")

    for field in descriptor.required:
        if raw_arguments.get(field) is None:
            return Invalid(reason=f"missing required field '{field}'")

    values = {
        name: schema["default"]
        for name, schema in descriptor.properties.items()
        if schema.get("default") is not None
    }
    values.update((k, v) for k, v in raw_arguments.items() if v is not None)

    try:
        args = record.model_validate(values)
    except ValidationError as e:
        return Invalid(reason=_describe(e))
    return Valid(args=args)
