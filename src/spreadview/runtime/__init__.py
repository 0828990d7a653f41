"""Runtime services: telemetry, settings, and user customization."""

from . import telemetry
from .customization import OpenHook, load_customization
from .settings import Settings

__all__ = ["telemetry", "Settings", "OpenHook", "load_customization"]
