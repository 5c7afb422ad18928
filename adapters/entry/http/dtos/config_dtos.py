from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .base_dtos import PartialUpdateDTO


class ConfigUpdateDTO(PartialUpdateDTO):
    """
    Partial update of the runtime config. Both fields are optional.
    """

    max_amount_usd: Optional[float] = Field(
        default=None, gt=0, allow_inf_nan=False, description="Max trade size in USD"
    )
    recheck_interval: Optional[int] = Field(default=None, ge=1, description="Seconds between rechecks")


class ConfigOutDTO(BaseModel):
    id: Optional[str] = None
    max_amount_usd: float
    recheck_interval: int
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
