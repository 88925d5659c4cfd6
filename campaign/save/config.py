"""
Save configuration.

Defaults match a single-slot desktop install; override from the
environment with CRAWLER_SAVE_DIR and CRAWLER_SAVE_SLOT.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class SaveConfig(BaseModel):
    """
    Persistence settings.

    Attributes:
        save_dir: Directory holding the slot file
        slot_key: Logical key of the single durable slot
        version: Format version written into every save
        verify_checksum: Reject saves whose checksum does not match
        indent: JSON indentation of the slot file (None for compact)
    """

    model_config = ConfigDict(extra='forbid')

    save_dir: Path = Path("game/saves")
    slot_key: str = Field(default="wizardry_save", min_length=1)
    version: str = "1.0.0"
    verify_checksum: bool = True
    indent: int | None = 2

    @classmethod
    def from_env(cls, **overrides) -> SaveConfig:
        values: dict = {}
        if "CRAWLER_SAVE_DIR" in os.environ:
            values["save_dir"] = Path(os.environ["CRAWLER_SAVE_DIR"])
        if "CRAWLER_SAVE_SLOT" in os.environ:
            values["slot_key"] = os.environ["CRAWLER_SAVE_SLOT"]
        values.update(overrides)
        return cls(**values)

    @property
    def major_version(self) -> str:
        return self.version.split(".", 1)[0]
