"""Snapshot models, assembly, formatting and validation."""
