"""Setup services.

Helpers that *start* the backend's per-user setup job and *wait* for it to report
completion before any stats are read.
"""
