"""Puppet-style version comparison."""

import re

_SEGMENT_RE = re.compile(r"[-.]|\d+|[^-.\d]+")


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def versioncmp(version_a: str, version_b: str) -> int:
    """
    Compare two version strings segment by segment.

    Numeric segments compare as integers unless either has a leading zero,
    in which case both compare as text. A ``-`` (pre-release marker) sorts
    before anything else, then ``.``.

    Returns:
        -1, 0 or 1 as ``version_a`` is lower than, equal to or higher than ``version_b``
    """
    segments_a = _SEGMENT_RE.findall(version_a)
    segments_b = _SEGMENT_RE.findall(version_b)

    for a, b in zip(segments_a, segments_b):
        if a == b:
            continue
        if a == "-":
            return -1
        if b == "-":
            return 1
        if a == ".":
            return -1
        if b == ".":
            return 1
        if a.isdigit() and b.isdigit():
            if a.startswith("0") or b.startswith("0"):
                return _cmp(a.upper(), b.upper())
            return _cmp(int(a), int(b))
        return _cmp(a.upper(), b.upper())

    return _cmp(version_a, version_b)
