"""
Shared schema configuration.
Wire payloads use camelCase keys while Python code uses snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, FrozenSet


class CamelModel(BaseModel):
    """Base schema accepting camelCase or snake_case input and emitting camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UpdateModel(CamelModel):
    """
    Base for partial updates; only explicitly provided fields are applied.

    Omitting a field leaves it unchanged. Sending null is only accepted for
    the fields listed in nullable_fields, which map to nullable columns.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v, info: ValidationInfo):
        """Required columns cannot be cleared."""
        if v is None and info.field_name not in cls.nullable_fields:
            raise ValueError("Field cannot be null")
        return v

    def to_update_dict(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
