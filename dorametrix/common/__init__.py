"""Helpers shared across Dorametrix components."""
