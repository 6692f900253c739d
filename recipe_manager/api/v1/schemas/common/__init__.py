"""Common schemas."""
