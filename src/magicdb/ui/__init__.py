"""User interfaces for MagicDB (command line)."""
