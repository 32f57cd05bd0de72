"""Core infrastructure: config, database, auth, errors."""
