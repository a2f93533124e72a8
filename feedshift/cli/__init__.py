"""Command-line frontend for the Feedshift engine."""
