"""TaskFlow Pro: console task and project dashboard backed by a hosted identity provider."""

__version__ = "0.1.0"
