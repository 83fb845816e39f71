"""Shared helpers used across the API package."""
