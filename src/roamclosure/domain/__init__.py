"""Domain layer — value types for notes and traversal results.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
