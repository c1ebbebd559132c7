"""Custom exception hierarchy for the trade psychology engine.

The aggregation and scoring functions never raise; these are used by
the configuration layer, the trade loader and explicit validation
checks.
"""


class PsychologyError(Exception):
    """Base exception for all trade psychology errors."""


# --- Configuration ---
class ConfigError(PsychologyError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(PsychologyError):
    """Trade data ingestion error."""


class TradeLoadError(DataError):
    """Trade file could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load trades from {path}: {reason}")


# --- Validation ---
class ValidationError(PsychologyError):
    """Psychological metrics or emotional data failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "validation failed")
