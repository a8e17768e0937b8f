"""Infrastructure layer — filesystem I/O, path resolution, and the store.

This layer depends on the domain layer plus anyio for async file access.
It must never import from services or config.
"""
