"""Live markdown editing engine with selection-aware formatting."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "formatting",
    "runtime",
]

__version__ = "0.1.0"
