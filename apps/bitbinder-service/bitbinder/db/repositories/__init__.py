"""
Per-domain repository modules for database access.

Every query is scoped by the owning user; functions return ``None``/``False``
for missing or foreign rows and routers translate that into 404s.
"""
