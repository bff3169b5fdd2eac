"""CLI command modules for mobproxy."""
