"""Runtime services shared by the controller and the command gate."""

from . import telemetry

__all__ = ["telemetry"]
