"""Contracts (Protocol) implemented by adapters."""
