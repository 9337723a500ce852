"""Pydantic schemas for the data flowing through the worker."""
