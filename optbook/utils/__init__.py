"""
Shared utilities for optbook.

Common functionality used across contexts:
- Logging setup
- Timestamps
- PDF inspection
"""

from optbook.utils.timestamp import format_elapsed, now

__all__ = ["format_elapsed", "now"]
