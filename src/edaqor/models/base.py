# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for edaqor."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class EdaBaseModel(BaseModel):
    """Base model with shared config for edaqor records."""

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )
