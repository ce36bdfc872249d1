# notesynth/__init__.py
"""Local LLM synthesis of connections between a web page and saved notes."""

__version__ = "0.3.0"
