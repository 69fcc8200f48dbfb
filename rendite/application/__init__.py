"""Caller-side services around the projection engine."""
