"""Test data builders and helper utilities."""
