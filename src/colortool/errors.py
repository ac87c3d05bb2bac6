from __future__ import annotations


class ColorToolError(RuntimeError):
    pass


class ConfigError(ColorToolError):
    """Malformed or incomplete table entry or tool config, raised at load time."""


class ComputeError(ColorToolError):
    pass


class DomainError(ComputeError, ValueError):
    """Singular matrix or zero denominator in the color math."""


class NotFoundError(ComputeError, LookupError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"unknown {kind}: {name}")
        self.kind = kind
        self.name = name
