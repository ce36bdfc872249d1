# notesynth/background/__init__.py
"""
Service lifecycle.

Exports:
    - SynthesisLifecycle: Wiring, startup probe and shutdown coordination
"""

from notesynth.background.lifecycle import SynthesisLifecycle

__all__ = ["SynthesisLifecycle"]
