"""Custom exception hierarchy for the statistics engine.

Per-record data problems are never raised: malformed fields degrade to
a zero contribution.  These exceptions cover the edges around the
engine (configuration, input files, filter construction).
"""


class JournalStatsError(Exception):
    """Base exception for all journal-stats errors."""


# --- Configuration ---
class ConfigError(JournalStatsError):
    """Invalid or missing configuration."""


# --- Data ---
class TradeDataError(JournalStatsError):
    """Trade input could not be read as a list of records."""


# --- Filters ---
class FilterError(JournalStatsError):
    """A view filter was constructed with inconsistent bounds."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid trade filter: {reason}")
