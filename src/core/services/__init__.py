"""Client services: the explicit client object and the blocking adapter."""
