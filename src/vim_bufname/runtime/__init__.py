"""Runtime services shared by the codec (telemetry, configuration)."""

from . import telemetry

__all__ = ["telemetry"]
