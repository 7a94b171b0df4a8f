"""Builders, deserializer, query generation and error types for termtree."""
