"""Boundary to the code-hosting API."""
