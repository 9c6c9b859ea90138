"""
Petition Registry - signature-collecting petitions under a single authority

Users create titled petitions that accumulate signatures toward a target.
A single authority principal, set exactly once, gates registry-wide
configuration and receives a flat creation fee for every new petition.

Core guarantees:
- Titles are globally unique (title -> id index)
- Ids are dense, monotonic and never reused
- Signature counts never decrease and never pass the target
- Closed petitions are terminal
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
