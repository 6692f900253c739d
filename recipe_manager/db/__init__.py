"""Database package: engine, sessions, ORM models and error translation."""
