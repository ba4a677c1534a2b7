"""termcards CLI - terminal interface for study sessions.

Main entry point is in main.py which registers the commands.

Usage:
    termcards                  # Installed console script
    python -m termcards        # Also works
"""


def __getattr__(name: str):
    """Lazy import to avoid RuntimeWarning when running as module."""
    if name == "app":
        from termcards.cli.main import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]
