"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, folco.toml only contains
overrides.  No section is required.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from folco.domain.types import AnchorPosition


class BatchConfig(BaseModel):
    """[batch] section."""

    model_config = {"frozen": True}

    channel_capacity: int = Field(default=32, ge=1)
    max_workers: int = Field(default=4, ge=1)


class DefaultsConfig(BaseModel):
    """[defaults] section: values used when CLI options are omitted."""

    model_config = {"frozen": True}

    decal_scale: float = Field(default=0.7, gt=0.0, le=1.0)
    overlay_scale: float = Field(default=0.7, gt=0.0, le=1.0)
    overlay_position: AnchorPosition = AnchorPosition.BOTTOM_RIGHT


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    size: int = Field(default=256, ge=16)
    base_color: str = Field(default="#5294e2", pattern=r"^#[0-9a-fA-F]{6}$")


class InstallConfig(BaseModel):
    """[install] section."""

    model_config = {"frozen": True}

    icon_stem: str = ".folco-icon"
