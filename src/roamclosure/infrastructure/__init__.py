"""Infrastructure layer — org-roam database access and filesystem resolution.

This layer depends on stdlib, the domain layer and SQLAlchemy.
It must never import from services, commands, or output.
"""
