"""zpmbench - benchmark zsh plugin managers inside Docker."""

__version__ = "0.3.0"
