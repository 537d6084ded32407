"""Adapters connecting the core to logging and HTTP servers."""
