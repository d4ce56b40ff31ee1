from typing import ClassVar, FrozenSet

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Body of a PUT: omitted fields are left alone, explicit nulls only clear ``nullable_fields``."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set:
            if name not in self.nullable_fields and getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self
