"""Pydantic models for nitrocli."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from nitrocli.command import Command

VolumeState = Literal['active', 'read-only', 'inactive']


class CliArgs(BaseModel):
    """Top-level command line arguments."""

    command: Command
    arguments: list[str]
    verbose: bool = False
    config: Path | None = None

    @field_validator('arguments')
    @classmethod
    def validate_arguments(cls, v: list[str]) -> list[str]:
        """Validate that the synthesized program name is present."""
        if not v or not v[0].strip():
            msg = 'Arguments must start with the program name'
            raise ValueError(msg)
        return v


class StorageStatus(BaseModel):
    """Status information reported by a Nitrokey Storage."""

    sd_card_id: int
    firmware_version_major: int
    firmware_version_minor: int
    firmware_locked: bool
    stored_keys: bool
    user_retry_count: int = Field(ge=0)
    admin_retry_count: int = Field(ge=0)
    unencrypted_volume: VolumeState = 'inactive'
    encrypted_volume: VolumeState = 'inactive'
    hidden_volume: VolumeState = 'inactive'

    @property
    def firmware_version(self) -> str:
        """Get the firmware version as displayed to the user."""
        return f'{self.firmware_version_major}.{self.firmware_version_minor}'
