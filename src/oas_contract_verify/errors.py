"""Exceptions raised while acquiring documents or configuration.

The verifier itself never raises: contract mismatches are reported as
``VerificationFailure`` values.
"""

from pathlib import Path


class OasVerifyError(Exception):
    """Base class for all errors raised by oas-contract-verify."""


class DocumentLoadError(OasVerifyError):
    """An API document could not be read or converted into the model."""

    def __init__(self, path: Path | str | None, reason: str):
        self.path = path
        self.reason = reason
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{reason}")


class SettingsError(OasVerifyError):
    """Environment configuration is invalid."""
