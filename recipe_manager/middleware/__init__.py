"""HTTP middleware and logging interception."""
