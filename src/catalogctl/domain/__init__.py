"""Domain layer — resource models, type tags, and version matching.

This layer depends only on stdlib, pydantic, ruamel.yaml and node-semver.
It must never import from services, infrastructure, or config.
"""
