"""Shared base for PATCH request bodies."""
from typing import ClassVar
from pydantic import BaseModel, ConfigDict, model_validator


class PartialUpdateRequest(BaseModel):
    """
    Partial update body: omitted fields are left unchanged.

    Fields listed in ``non_nullable`` map to NOT NULL columns, so an explicit
    ``null`` for them is rejected instead of reaching the database.
    """
    model_config = ConfigDict(extra='forbid')
    non_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode='after')
    def reject_explicit_nulls(self):
        for field in self.non_nullable:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
