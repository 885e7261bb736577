"""Core interfaces.

Contracts (Protocol) implemented by adapters: authentication providers and the
optional HTTP observability hook.
"""
