"""
Save module - game state persistence.

Provides:
- Single-slot save/load
- Corruption detection (schema, version, checksum, strict model)
- Atomic file storage and in-memory storage
"""

from campaign.save.config import SaveConfig
from campaign.save.errors import SaveLoadError, SaveNotFoundError, SaveCorruptedError
from campaign.save.storage import SaveStorage, FileSaveStorage, MemorySaveStorage
from campaign.save.service import SaveService, SAVE_ENVELOPE_SCHEMA, calculate_checksum

__all__ = [
    "SaveConfig",
    "SaveLoadError",
    "SaveNotFoundError",
    "SaveCorruptedError",
    "SaveStorage",
    "FileSaveStorage",
    "MemorySaveStorage",
    "SaveService",
    "SAVE_ENVELOPE_SCHEMA",
    "calculate_checksum",
]
