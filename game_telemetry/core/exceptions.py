"""Exceptions raised when the surrounding application violates a precondition."""


class TelemetryError(Exception):
    """Base telemetry error."""

    pass


class TemplateLoadError(TelemetryError):
    """Digit templates or exclusion masks could not be loaded."""

    pass


class ConfigError(TelemetryError):
    """Invalid or unreadable configuration."""

    pass


class FrameReadError(TelemetryError):
    """A frame file could not be read or its timestamp parsed."""

    pass
