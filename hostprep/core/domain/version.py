"""
Version comparison (pure).

Parses the version strings the tools print (``3.11``,
``Python 3.11.4``, ``v2.24.0``, ``3.12.0rc1``) into integer tuples
and checks them against a minimum. No I/O, no subprocess.
"""

from __future__ import annotations

import re

_VERSION_RE = re.compile(r"(\d+(?:\.\d+)*)")


def parse_version(version: str) -> tuple[int, ...]:
    """Parse the first dotted numeric run of ``version`` into a tuple.

    Raises:
        ValueError: If ``version`` contains no numeric component.
    """
    text = version.strip()
    if text.lower().startswith("python"):
        text = text[len("python"):].strip()
    text = text.lstrip("vV")
    match = _VERSION_RE.match(text)
    if not match:
        raise ValueError(f"Not a version string: {version!r}")
    return tuple(int(part) for part in match.group(1).split("."))


def _pad(a: tuple[int, ...], b: tuple[int, ...]) -> tuple[tuple[int, ...], tuple[int, ...]]:
    width = max(len(a), len(b))
    return a + (0,) * (width - len(a)), b + (0,) * (width - len(b))


def meets_minimum(version: str, minimum: str) -> bool:
    """True when ``version`` >= ``minimum`` (``3.8`` < ``3.9`` <= ``3.11``)."""
    have, want = _pad(parse_version(version), parse_version(minimum))
    return have >= want
