"""Core package: configuration, logging and security primitives."""
