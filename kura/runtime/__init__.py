"""Runtime layer: terminal control, config, and the interactive loop."""

from .app import build_controller, run_filer
from .config import AppOptions, load_config

__all__ = ["AppOptions", "build_controller", "load_config", "run_filer"]
