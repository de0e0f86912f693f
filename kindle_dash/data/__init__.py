"""Data sources and the fetch orchestrator."""
