"""
Per-session map state: center, fetched data, filters and the last AI answer.
"""
