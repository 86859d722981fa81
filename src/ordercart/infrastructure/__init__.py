"""Infrastructure layer — SQLite store and reference collaborators.

This layer depends on stdlib, the domain models, SQLAlchemy, and the
shared service helpers. It satisfies the collaborator protocols the
services consume and must never import from commands or output.
"""
