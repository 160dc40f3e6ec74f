"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool, schema bootstrap and the
data-access error taxonomy.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
