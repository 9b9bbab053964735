"""Application layer - Use cases and port definitions.

This layer contains:
- Use Cases: Command handlers (send, cancel, record and void payments, customers)
- Queries: Read-only lookups returning flat DTOs
- Services: Invoice number allocation
- Ports: Abstract interfaces for repositories, unit of work, locks, time, sequences
- DTOs: Flat projections returned to callers

The application layer depends only on the domain layer.
Infrastructure implementations are injected via ports.
"""
