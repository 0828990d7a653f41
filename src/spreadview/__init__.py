"""UI-agnostic two-up document viewer core."""

__all__ = [
    "adapters",
    "actions",
    "document",
    "keymaps",
    "modes",
    "navigation",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
