"""Pydantic schemas of API version 1."""
