"""Service layer — per-type catalog operations bound to a catalog root.

Services project a :class:`~catalogctl.domain.types.ResourceType` onto
the resource store in :mod:`catalogctl.infrastructure.store`.
"""
