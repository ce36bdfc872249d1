# notesynth/__main__.py
"""Entry point for `python -m notesynth`."""

from notesynth.cli import app

if __name__ == "__main__":
    app()
