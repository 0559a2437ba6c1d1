"""Deterministic analysis tools."""
