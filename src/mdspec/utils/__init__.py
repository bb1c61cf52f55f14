"""Utility helpers for mdspec."""
