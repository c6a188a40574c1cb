"""Utility functions shared by the whole package."""
