"""Domain models and errors.

Pure data structures (Pydantic v2) and the exception taxonomy. The domain does
not know about HTTP clients, the CLI or the worker pool.
"""
