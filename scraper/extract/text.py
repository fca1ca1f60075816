"""
Text cleanup for extracted DOM text.

Only the ends are trimmed; inner whitespace is part of the product's own
text and is kept as the page renders it.
"""

from __future__ import annotations

from typing import Optional


def non_empty(text: Optional[str]) -> Optional[str]:
    """Trim text and return None when nothing is left."""
    if text is None:
        return None
    return text.strip() or None
