"""Command line interface for echochat."""
