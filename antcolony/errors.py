"""Structured error hierarchy for the colony simulation."""


class ColonyError(Exception):
    """Base for all colony simulation errors."""

    pass


class ValidationError(ColonyError):
    """Input validation at boundary failed."""

    pass


class ConfigurationError(ColonyError):
    """Configuration values cannot describe a usable simulation."""

    pass


class EngineStateError(ColonyError):
    """Engine in invalid state for requested operation."""

    pass


class SerializationError(ColonyError):
    """Generation history serialization/deserialization failed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to serialize history at {path}: {reason}")
