"""Interactive bookmark browser.

``browse_cmd`` is imported lazily so value types in ``shellmark.browse.state``
can be used without pulling in terminal handling.
"""

from __future__ import annotations


def browse_cmd(*args, **kwargs):
    """Lazily import the browse entrypoint to keep package imports lightweight."""
    from .app import browse_cmd as _browse_cmd

    return _browse_cmd(*args, **kwargs)


__all__ = ["browse_cmd"]
