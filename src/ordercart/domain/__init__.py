"""Domain layer — catalog items, cart store, orders, and lifecycles.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
