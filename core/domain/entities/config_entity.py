from __future__ import annotations

from core.domain.entities.base_entity import MongoEntity


class ConfigEntity(MongoEntity):
    """
    Global runtime configuration for the arbitrage bot.

    Stored as a single document keyed by "key" == "runtime" so the bot can
    change thresholds without redeploying.
    """

    key: str = "runtime"

    max_amount_usd: float
    recheck_interval: int  # seconds
