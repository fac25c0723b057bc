"""NiceGUI-based web UI for BizBooks.

This package is optional: it requires the `frontend` extra.
Importing `bizbooks.ui` does not eagerly import NiceGUI.
"""

from __future__ import annotations
