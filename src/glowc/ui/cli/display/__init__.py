"""Display management for CLI interface."""

from glowc.ui.cli.display.progress import ProgressDisplay
from glowc.ui.cli.display.result import ResultDisplay

__all__ = ["ProgressDisplay", "ResultDisplay"]
