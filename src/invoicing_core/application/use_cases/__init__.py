"""Use cases - Command handlers that orchestrate domain transitions.

Each use case takes the resource lock, reads the clock inside it, and does
all persistence through one UnitOfWork so that its writes are all-or-nothing.
"""
