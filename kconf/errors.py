"""Exceptions raised by kconf. Every one of them aborts the run."""

from pathlib import Path


class KconfError(Exception):
    """Base class for kconf errors."""


class KubeconfigNotFoundError(KconfError):
    """Raised when a kubeconfig path does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Kubeconfig file not found: {path}")


class MalformedKubeconfigError(KconfError):
    """Raised when a file does not parse into a kubeconfig document."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse kubeconfig {path}: {reason}")


class KubeconfigReadError(KconfError):
    """Raised when a kubeconfig exists but cannot be read."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        super().__init__(f"Failed to read kubeconfig {path}: {cause}")


class KubeconfigWriteError(KconfError):
    """Raised when the destination kubeconfig cannot be written."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        super().__init__(f"Failed to write kubeconfig {path}: {cause}")


class SettingsError(KconfError):
    """Raised when the kconf settings file cannot be used."""
