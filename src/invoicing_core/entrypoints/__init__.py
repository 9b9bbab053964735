"""Entrypoints layer - Delivery mechanisms.

This layer contains:
- Bootstrap: Composition root wiring use cases to adapters
- Errors: Mapping of domain error kinds to HTTP status codes and payloads

Entrypoints translate external requests into use case calls
and format responses for the delivery mechanism.
"""
