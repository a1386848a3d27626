"""Operator tools (console scripts)."""
