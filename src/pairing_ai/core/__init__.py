"""Core application infrastructure: configuration, exceptions, middleware, events."""
