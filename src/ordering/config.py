"""Ordering configuration: business constants loaded from TOML.

Settings resolve in this order (later wins):
    1. Defaults declared on OrderingSettings
    2. Top-level keys of the config file (``ordering.toml`` or $ORDERING_CONFIG)
    3. Keys under ``[env.<name>]`` for the active environment ($ORDERING_ENV)
"""

import os
import tomllib
from decimal import Decimal
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_FILE = "ordering.toml"


class OrderingSettings(BaseModel):
    daily_quota_limit: int = Field(default=100, ge=0)
    prohibited_products: frozenset[str] = frozenset()
    bulk_threshold: int = Field(default=10, ge=0)
    bulk_discount_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    surcharge_rate: Decimal = Field(default=Decimal("0.20"), ge=0)
    discount_codes: dict[str, Decimal] = Field(default_factory=dict)

    model_config = {"frozen": True, "extra": "forbid"}

    def is_prohibited(self, product: str) -> bool:
        return product in self.prohibited_products


def load_settings(path: str | Path | None = None, env: str | None = None) -> OrderingSettings:
    """Build settings from the config file, layering the environment table on top.

    A missing file is not an error: the defaults apply.
    """
    path = Path(path or os.getenv("ORDERING_CONFIG") or DEFAULT_CONFIG_FILE)
    env = env or os.getenv("ORDERING_ENV")

    data: dict = {}
    if path.exists():
        with path.open("rb") as fp:
            raw = tomllib.load(fp)
        environments = raw.pop("env", {})
        data.update(raw)
        if env and env in environments:
            data.update(environments[env])
        logger.debug("Loaded ordering settings", path=str(path), env=env)
    else:
        logger.debug("No ordering config file, using defaults", path=str(path))

    return OrderingSettings.model_validate(data)
