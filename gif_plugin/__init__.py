"""
GIF slash-command plugin.

Lets chat users search and post GIFs from Giphy or Gfycat with ``/gif`` and
preview/shuffle them privately with ``/gifs``.
"""

from __future__ import annotations

from dotenv import load_dotenv

# Load local env vars when present. Keep imports lightweight to avoid side-effects
# during package import in unit tests.
load_dotenv()

__version__ = "0.1.0"
__all__: list[str] = []
