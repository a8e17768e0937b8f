"""Metadata document codec — YAML frontmatter + markdown body.

A resource's ``index.md`` starts with a ``---`` delimited YAML block
holding its fields, followed by free-text markdown. Parsing and rendering
are pure string operations; file I/O lives in
:mod:`catalogctl.infrastructure.filesystem`.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from ruamel.yaml import YAML

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful and a failed dump can leave a
    shared instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


# ---------------------------------------------------------------------------
# Canonical frontmatter key ordering
# ---------------------------------------------------------------------------

CANONICAL_KEY_ORDER: list[str] = [
    "id",
    "name",
    "version",
    "summary",
    "owners",
    "badges",
    "domains",
    "services",
    "sends",
    "receives",
    "channels",
]

_FRONTMATTER_DELIMITER = "---"


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter and body from markdown content.

    Expects the document to start with ``---`` on the first line. The
    second ``---`` closes the YAML block. Everything after is the body.
    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no valid
        frontmatter delimiters are found, returns ``({}, content)``.

    Raises:
        ruamel.yaml.YAMLError: If the frontmatter block is not valid YAML.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    if body.startswith("\n"):
        body = body[1:]

    fm = _new_yaml().load(yaml_block) or {}
    if not isinstance(fm, dict):
        return {}, content
    return fm, body


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Keys present in :data:`CANONICAL_KEY_ORDER` come first (in that
    order), followed by any remaining keys sorted alphabetically.
    ``None`` values are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]

    for key in sorted(fm.keys()):
        if key not in ordered and fm[key] is not None:
            ordered[key] = fm[key]

    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a frontmatter dict and body text into a metadata document."""
    ordered = order_frontmatter(frontmatter)
    buf = StringIO()
    _new_yaml().dump(ordered, buf)
    yaml_text = buf.getvalue()

    parts = [_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.extend(["\n", body])
        if not body.endswith("\n"):
            parts.append("\n")
    return "".join(parts)


def to_plain(value: Any) -> Any:
    """Convert ruamel round-trip containers into plain dicts and lists."""
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    if isinstance(value, str):
        return str(value)
    return value
