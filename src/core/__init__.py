"""Core: configuration, domain models, contracts (Protocol) and the client
services that wire adapters together."""
