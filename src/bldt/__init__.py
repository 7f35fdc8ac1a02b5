"""bldt

A local, file-backed cache of remote difficulty tables. Each table is fetched
per variant over HTTP, translated into entries by a format adapter, and kept
as one JSON record on disk so lookups work offline.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
