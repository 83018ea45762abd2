"""
Caesar Toolkit Shared Module
=============================

Configuration, logging, console presentation, result models, and
statistics helpers shared by the toolkit's command layer.
"""

from shared.config import ToolkitConfig, get_config

__all__ = ["ToolkitConfig", "get_config"]
