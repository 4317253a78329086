from __future__ import annotations


class MalformedInputError(ValueError):
    """Input broke an invariant the core relies on; the run is aborted."""
