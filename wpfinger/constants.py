"""
Centralized Constants & Enums
=============================
This module defines canonical constants for wpfinger.
Verdicts, source kinds, item kinds and log levels are defined here.

IMPORTANT: Do NOT use string literals for these values elsewhere in the codebase.
Always import and use these enums to ensure consistency.
"""

from enum import Enum
from typing import Dict


class Verdict(str, Enum):
    """
    Terminal classification of a plugin/theme version check.

    - UNKNOWN: the resource was absent or could not be fetched
    - DETECTED: the resource was found and parsed but carries no usable version
    - APPEARS: the extracted version falls inside the vulnerable range
    - SAFE: the extracted version is outside the vulnerable range
    """
    UNKNOWN = "unknown"
    DETECTED = "detected"
    APPEARS = "appears"
    SAFE = "safe"

    def __str__(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return VERDICT_DESCRIPTIONS[self]


class SourceKind(str, Enum):
    """Kind of document a version token is extracted from."""
    README = "readme"
    STYLESHEET = "stylesheet"

    def __str__(self) -> str:
        return self.value


class ItemKind(str, Enum):
    """Kind of WordPress extension being checked."""
    PLUGIN = "plugin"
    THEME = "theme"

    def __str__(self) -> str:
        return self.value


class LogLevel(str, Enum):
    """Log levels for observer events."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Verdict descriptions (for CLI output)
# ============================================================================

VERDICT_DESCRIPTIONS: Dict[Verdict, str] = {
    Verdict.UNKNOWN: "Cannot reliably check exploitability.",
    Verdict.DETECTED: "The target service is running, but could not be validated.",
    Verdict.APPEARS: "The target appears to be vulnerable.",
    Verdict.SAFE: "The target is not exploitable.",
}

VERDICT_COLORS: Dict[Verdict, str] = {
    Verdict.UNKNOWN: "dim",
    Verdict.DETECTED: "yellow",
    Verdict.APPEARS: "red",
    Verdict.SAFE: "green",
}


# ============================================================================
# WordPress readme / stylesheet file names
# ============================================================================

# Tried in order; case variants cover case-sensitive file systems
README_CANDIDATES = ("readme.txt", "Readme.txt", "README.txt")

STYLESHEET_NAME = "style.css"
