"""Enumerations shared across the API, services and models."""
