"""Command-line interface of the double-counting check."""
