from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, model_validator


class PartialUpdateDTO(BaseModel):
    """
    Base for sparse update payloads.

    A field left out of the JSON body is "unset" and never touches the stored
    record. Sending null is rejected: there is no way to clear a field.
    """

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name, value in data.items():
                if value is None and name in cls.model_fields:
                    raise ValueError(f"{name} cannot be null")
        return data

    def changes(self) -> Dict[str, Any]:
        """
        Only the fields present in the request, ready for a $set.
        """
        return self.model_dump(mode="python", exclude_unset=True)
