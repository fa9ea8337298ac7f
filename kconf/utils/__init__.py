"""Utility helpers for the kconf CLI."""
