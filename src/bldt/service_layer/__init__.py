"""Service layer for bldt.

Implements the table database use-cases: loading the on-disk records under
the database locks, refreshing tables from their remote sources and answering
lookups. Orchestrates the domain objects, the format adapters registered on
each table and the storage adapters in `bldt.adapters`.

Dependency rule: may import `bldt.domain`, `bldt.interfaces` and
`bldt.adapters`, but not `bldt.entrypoints`.
"""

from .database import TableDatabase

__all__ = ["TableDatabase"]
