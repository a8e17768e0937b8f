"""Version matching — latest, exact, and semver range tokens.

A requested version token is one of:

- ``None`` or ``"latest"``: the Primary location of an id.
- an exact version string: matched by string equality.
- a node-style semver range (``0.0.x``, ``^1.2.0``, ``>=1.0.0 <2.0.0``).

Range evaluation uses :mod:`nodesemver` so range syntax behaves the way
catalog authors already write it in ``package.json`` files.
"""

from __future__ import annotations

import functools
from collections.abc import Sequence
from typing import Protocol, TypeVar

import nodesemver

from catalogctl.domain.types import LATEST


class Versioned(Protocol):
    """Anything that declares a version and whether it is archived."""

    @property
    def version(self) -> str: ...

    @property
    def archived(self) -> bool: ...


V = TypeVar("V", bound=Versioned)


def is_latest(token: str | None) -> bool:
    """Return True if *token* selects the Primary location."""
    return token is None or token == LATEST


def is_valid_version(version: str) -> bool:
    """Return True if *version* parses as a (loose) semantic version."""
    try:
        nodesemver.make_semver(version, loose=True)
    except (ValueError, TypeError):
        return False
    return True


def satisfies(declared: str, requested: str) -> bool:
    """Decide whether a *declared* version satisfies a *requested* token.

    Exact string equality always matches. Otherwise *requested* is
    evaluated as a semver range; declared versions that are not valid
    semver never satisfy a range.
    """
    if is_latest(requested):
        msg = "The latest token is resolved by location, not by version"
        raise ValueError(msg)
    if declared == requested:
        return True
    if not is_valid_version(declared):
        return False
    try:
        return bool(nodesemver.satisfies(declared, requested, loose=True))
    except (ValueError, TypeError):
        return False


def _compare(a: Versioned, b: Versioned) -> int:
    return nodesemver.compare(a.version, b.version, loose=True)


def best_match(candidates: Sequence[V], requested: str) -> V | None:
    """Pick the candidate that best matches *requested*.

    Exact matches win, Primary before Archived and otherwise in the
    given order. Failing that, the highest version satisfying the range
    is returned; equal versions keep the first in the given order.
    """
    exact = [c for c in candidates if c.version == requested]
    if exact:
        exact.sort(key=lambda c: c.archived)
        return exact[0]

    matching = [c for c in candidates if satisfies(c.version, requested)]
    if not matching:
        return None
    # max() keeps the first of equal elements.
    return max(matching, key=functools.cmp_to_key(_compare))
