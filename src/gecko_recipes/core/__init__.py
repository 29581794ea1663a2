"""Core application wiring: configuration, errors, middleware and lifespan."""
