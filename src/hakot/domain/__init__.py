"""Domain layer — record shapes, credential rules, and schedule projection.

This layer depends only on stdlib, pydantic and bcrypt.
It must never import from services, infrastructure, commands, or config.
"""
