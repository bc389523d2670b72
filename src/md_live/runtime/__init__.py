"""Runtime services shared by the engine and its hosts."""

from . import telemetry

__all__ = ["telemetry"]
