"""Click commands for the termtree CLI."""
