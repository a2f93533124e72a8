"""FastAPI server adapter for the Feedshift engine."""
