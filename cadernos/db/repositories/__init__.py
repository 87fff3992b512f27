"""
Per-domain repository modules for database access.

`notebooks` owns every lifecycle transition; `volunteers` is read-only.
"""
