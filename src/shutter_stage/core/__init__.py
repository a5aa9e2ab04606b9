"""Core configuration, security, and error primitives."""
