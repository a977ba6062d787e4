"""Utility functions and helpers for the scribectl application."""
