"""Core configuration, persistence, caching and observability utilities."""
