"""Terminal dashboard for a GitHub user's contribution calendar and repositories."""

__version__ = "0.1.0"
