"""Base pieces for the camelCase JSON contracts of the backend services."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal inside, JSON number on the wire
WireDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self, **kwargs) -> dict:
        return self.model_dump(mode="json", by_alias=True, **kwargs)
