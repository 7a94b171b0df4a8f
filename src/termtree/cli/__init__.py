"""Command line interface for termtree."""
