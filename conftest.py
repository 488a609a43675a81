"""Lets pytest import wwbot from a source checkout."""
