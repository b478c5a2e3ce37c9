"""Shared pydantic base for runner wire payloads."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Accepts snake_case and the runner's camelCase keys; dumps snake_case by default."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
