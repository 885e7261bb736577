"""Adapters: HTTP client, authentication, controllers and exporters (pure I/O)."""
