"""Semantic versions, tag coercion and version range matching.

Release tags are coerced (``v3.19.2`` -> ``3.19.2``, ``v2.8.12.2`` ->
``2.8.12``) so every catalog entry is a plain ``MAJOR.MINOR.PATCH``.

Range expressions follow the npm ``semver`` grammar, restricted to
release versions:

    ""  "*"  "x"           any version
    "3"  "3.x"  "3.15.x"   X-ranges
    "3.15.2"  "=3.15.2"    exact
    ">=3.10 <3.20"         comparator sets (space means AND)
    "~3.15"  "^3.15.2"     tilde / caret
    "3.10 - 3.18"          hyphen range
    "3.15.x || 3.18.x"     alternatives
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

__all__ = [
    "SemVer",
    "Comparator",
    "VersionRange",
    "coerce_version",
    "parse_version",
    "satisfies",
]

Op = Literal["<", "<=", ">", ">=", "="]
# (major, minor, patch); None marks a wildcard or missing component
Partial = tuple[int | None, int | None, int | None]

_VERSION_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")
_COERCE_RE = re.compile(r"(?<!\d)(\d{1,16})(?:\.(\d{1,16}))?(?:\.(\d{1,16}))?(?!\d)")
_PARTIAL_RE = re.compile(
    r"^v?(?P<major>[xX*]|\d+)"
    r"(?:\.(?P<minor>[xX*]|\d+)"
    r"(?:\.(?P<patch>[xX*]|\d+)(?:\+[0-9A-Za-z.-]+)?)?)?$"
)
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_GLUE_RE = re.compile(r"(<=|>=|<|>|=|~>|~|\^)\s+")
_OP_RE = re.compile(r"^(?P<op><=|>=|<|>|=|~>|~|\^)?(?P<rest>.*)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> SemVer | None:
    """Parse a strict ``MAJOR.MINOR.PATCH`` string (optional ``v`` prefix)."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def coerce_version(text: str) -> SemVer | None:
    """Extract the first version-shaped run of digits from ``text``.

    Missing minor/patch components default to 0 and anything after the
    third component is ignored. Returns None when ``text`` holds no digits
    at all (e.g. ``"not-a-version"``).
    """
    m = _COERCE_RE.search(text)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2) or 0), int(m.group(3) or 0))


@dataclass(frozen=True, slots=True)
class Comparator:
    op: Op
    version: SemVer

    def test(self, v: SemVer) -> bool:
        match self.op:
            case "<":
                return v < self.version
            case "<=":
                return v <= self.version
            case ">":
                return v > self.version
            case ">=":
                return v >= self.version
            case "=":
                return v == self.version

    def __str__(self) -> str:
        return f"{self.op}{self.version}"


# Nothing is below 0.0.0, so this comparator set never matches.
_NOTHING: tuple[Comparator, ...] = (Comparator("<", SemVer(0, 0, 0)),)


def _floor(p: Partial) -> SemVer:
    return SemVer(p[0] or 0, p[1] or 0, p[2] or 0)


def _bump(p: Partial) -> SemVer:
    """Smallest version above every version the partial covers."""
    major, minor, _ = p
    assert major is not None
    if minor is None:
        return SemVer(major + 1, 0, 0)
    return SemVer(major, minor + 1, 0)


def _parse_partial(text: str) -> Partial | None:
    m = _PARTIAL_RE.match(text)
    if m is None:
        return None
    parts: list[int | None] = []
    wild = False
    for group in (m["major"], m["minor"], m["patch"]):
        # Everything after the first wildcard is a wildcard too ("1.x.3" == "1.x").
        if wild or group is None or group in ("x", "X", "*"):
            wild = True
            parts.append(None)
        else:
            parts.append(int(group))
    return (parts[0], parts[1], parts[2])


def _primitive(op: str, p: Partial) -> tuple[Comparator, ...]:
    if p[0] is None:
        return _NOTHING if op in (">", "<") else ()

    full = p[2] is not None
    match op:
        case "" | "=":
            if full:
                return (Comparator("=", _floor(p)),)
            return (Comparator(">=", _floor(p)), Comparator("<", _bump(p)))
        case ">":
            return (Comparator(">", _floor(p)),) if full else (Comparator(">=", _bump(p)),)
        case ">=":
            return (Comparator(">=", _floor(p)),)
        case "<":
            return (Comparator("<", _floor(p)),)
        case _:  # "<="
            return (Comparator("<=", _floor(p)),) if full else (Comparator("<", _bump(p)),)


def _tilde(p: Partial) -> tuple[Comparator, ...]:
    major, minor, _ = p
    if major is None:
        return ()
    upper = SemVer(major + 1, 0, 0) if minor is None else SemVer(major, minor + 1, 0)
    return (Comparator(">=", _floor(p)), Comparator("<", upper))


def _caret(p: Partial) -> tuple[Comparator, ...]:
    major, minor, patch = p
    if major is None:
        return ()
    # The upper bound bumps the left-most non-zero component.
    if major > 0 or minor is None:
        upper = SemVer(major + 1, 0, 0)
    elif minor > 0 or patch is None:
        upper = SemVer(0, minor + 1, 0)
    else:
        upper = SemVer(0, 0, patch + 1)
    return (Comparator(">=", _floor(p)), Comparator("<", upper))


def _hyphen(low: Partial, high: Partial) -> tuple[Comparator, ...]:
    comps: list[Comparator] = []
    if low[0] is not None:
        comps.append(Comparator(">=", _floor(low)))
    if high[0] is not None:
        if high[2] is not None:
            comps.append(Comparator("<=", _floor(high)))
        else:
            comps.append(Comparator("<", _bump(high)))
    return tuple(comps)


def _parse_comparator_set(text: str) -> tuple[Comparator, ...] | None:
    text = text.strip()

    hyphen = _HYPHEN_RE.match(text)
    if hyphen is not None:
        low = _parse_partial(hyphen.group(1))
        high = _parse_partial(hyphen.group(2))
        if low is None or high is None:
            return None
        return _hyphen(low, high)

    comps: list[Comparator] = []
    for token in _GLUE_RE.sub(r"\1", text).split():
        m = _OP_RE.match(token)
        assert m is not None
        op = m["op"] or ""
        partial = _parse_partial(m["rest"])
        if partial is None:
            return None
        if op in ("~", "~>"):
            comps.extend(_tilde(partial))
        elif op == "^":
            comps.extend(_caret(partial))
        else:
            comps.extend(_primitive(op, partial))
    return tuple(comps)


@dataclass(frozen=True, slots=True)
class VersionRange:
    """A parsed range: any alternative whose comparators all hold matches.

    An alternative with no comparators matches every version.
    """

    raw: str
    alternatives: tuple[tuple[Comparator, ...], ...]

    @classmethod
    def parse(cls, text: str) -> VersionRange | None:
        """Parse a range expression. Returns None when it is malformed."""
        alternatives: list[tuple[Comparator, ...]] = []
        for part in text.split("||"):
            comps = _parse_comparator_set(part)
            if comps is None:
                return None
            alternatives.append(comps)
        return cls(raw=text, alternatives=tuple(alternatives))

    def __contains__(self, version: SemVer) -> bool:
        return any(all(c.test(version) for c in alt) for alt in self.alternatives)

    def __str__(self) -> str:
        return " || ".join(" ".join(str(c) for c in alt) or "*" for alt in self.alternatives)


def satisfies(version: str, range_text: str) -> bool:
    """Return True if ``version`` parses and lies within ``range_text``."""
    v = parse_version(version)
    r = VersionRange.parse(range_text)
    if v is None or r is None:
        return False
    return v in r
