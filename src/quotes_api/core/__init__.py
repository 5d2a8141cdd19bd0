"""Core application plumbing: configuration, exceptions, middleware, events."""
