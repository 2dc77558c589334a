"""Shared base model for wire contracts.

Attributes are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every contract that crosses the HTTP or model boundary."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """Dump as JSON-compatible camelCase dict."""
        return self.model_dump(mode="json", by_alias=True)
