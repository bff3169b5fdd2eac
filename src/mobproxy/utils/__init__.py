"""Utility helpers for mobproxy."""
