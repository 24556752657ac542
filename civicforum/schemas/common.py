"""Shared schema building blocks."""

from enum import Enum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DataSource(str, Enum):
    """Where a piece of data came from."""

    LIVE = "live"            # fetched from the upstream API
    FALLBACK = "fallback"    # embedded dataset used because upstream failed
    ESTIMATED = "estimated"  # produced by a seeded generator
    SAMPLE = "sample"        # illustrative sample data, e.g. no API key
    UNAVAILABLE = "unavailable"  # source not configured or failed, no substitute


class CamelModel(BaseModel):
    """Base for read models consumed directly by the dashboard (camelCase JSON)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
