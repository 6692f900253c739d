"""Application exceptions and their HTTP handlers."""
