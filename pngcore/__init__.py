"""Core PNG building blocks: chunk types, Adam7 interlacing, colour and animation metadata."""

__version__ = "0.1.0"
__all__ = ["adam7", "animation", "chunk", "colors", "info"]