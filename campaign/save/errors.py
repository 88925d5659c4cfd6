"""Persistence exceptions."""


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""


class SaveNotFoundError(SaveLoadError):
    """The save slot is empty."""

    def __init__(self, message: str = "No save data found"):
        super().__init__(message)


class SaveCorruptedError(SaveLoadError):
    """The save slot holds content that does not decode to a valid game."""

    def __init__(self, reason: str = "unreadable"):
        self.reason = reason
        super().__init__(f"Save data corrupted - {reason}")
