"""trackctl — process tracker control for tracing sessions."""

__version__ = "0.1.0"
