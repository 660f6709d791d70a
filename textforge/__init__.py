"""HTTP service that transforms and generates text with a chat-completion model and caches results on disk."""

__version__ = "0.1.0"
__all__ = ["__version__"]