"""E-ink dashboard generator."""
