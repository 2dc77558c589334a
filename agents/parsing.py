"""Response parsing for free-text completion output.

The only transformation applied before json.loads is removal of a single
surrounding Markdown code fence (``` or ```json ... ```).
"""

import json
import re
from typing import Any, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from errors import ParseError

T = TypeVar("T")

_FENCE = "```"
_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_+\-]*[ \t]*(?:\r?\n)?")
_FENCE_CLOSE = re.compile(r"(?:\r?\n)?[ \t]*```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading fence (with optional language tag) and trailing fence.

    Text that does not start with a fence is returned trimmed but otherwise
    untouched.
    """
    text = text.strip()
    if not text.startswith(_FENCE):
        return text
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def load_json(text: str) -> Any:
    """Strip a code fence and decode JSON.

    Raises:
        ParseError: If the remaining text is not valid JSON
    """
    cleaned = strip_code_fence(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e}", raw_text=text) from e


def validate_payload(data: Any, schema: Union[Type[BaseModel], TypeAdapter], raw_text: str = "") -> Any:
    """Validate decoded JSON against a pydantic model or TypeAdapter.

    Raises:
        ParseError: If the data does not match the schema
    """
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(data)
        return schema.model_validate(data)
    except ValidationError as e:
        raise ParseError(
            f"Response does not match the expected shape ({e.error_count()} errors)",
            raw_text=raw_text,
        ) from e


def parse_payload(text: str, schema: Union[Type[BaseModel], TypeAdapter]) -> Any:
    """Parse raw model output into a validated payload."""
    return validate_payload(load_json(text), schema, raw_text=text)
