"""
UI components for the devsetup package.
"""

from devsetup.ui.console import Console
from devsetup.ui.prompts import Prompts
from devsetup.ui.progress import ProgressTracker

__all__ = ["Console", "Prompts", "ProgressTracker"]
