"""Data models for termtree: terms, definition records and configuration."""
