"""Custom exception hierarchy for script running."""

import json


class PkgRunError(Exception):
    """Base exception for all pkgrun errors."""


class ConfigError(PkgRunError):
    """Raised when settings loading or validation fails."""


class ManifestError(PkgRunError):
    """Raised when the project manifest cannot be read."""


class CommandNotFoundError(PkgRunError):
    """Raised when an action matches neither a manifest script nor a binary."""

    def __init__(self, action: str, suggestion: str | None = None) -> None:
        self.action = action
        self.suggestion = suggestion
        message = f"Command {json.dumps(action)} not found."
        if suggestion:
            message += f" Did you mean {json.dumps(suggestion)}?"
        super().__init__(message)


class ExecutionError(PkgRunError):
    """Raised when a stage exits unsuccessfully."""

    def __init__(self, message: str, stage: str = "", returncode: int = -1) -> None:
        self.stage = stage
        self.returncode = returncode
        super().__init__(message)
