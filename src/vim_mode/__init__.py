"""Modal editing state controller for host text editors."""

__all__ = [
    "adapters",
    "commands",
    "config",
    "contribution",
    "errors",
    "host",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
