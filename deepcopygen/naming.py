"""Naming of types in generated code, with tracking of the imports they need."""

from __future__ import annotations

from collections.abc import Iterator

from .model import Kind, Type


def _sanitize(segment: str) -> str:
    return "".join(ch for ch in segment if ch.isalnum() or ch == "_")


def _packages_in(t: Type, seen: set[int] | None = None) -> Iterator[str]:
    """Yield the packages of the named types that ``t`` refers to."""
    seen = set() if seen is None else seen
    if id(t) in seen:
        return
    seen.add(id(t))
    if t.name.package:
        yield t.name.package
        return
    for part in (t.key, t.elem):
        if part is not None:
            yield from _packages_in(part, seen)


class ImportTracker:
    """Assigns unique local names to imported packages."""

    def __init__(self) -> None:
        self._by_path: dict[str, str] = {}
        self._taken: set[str] = set()

    def add_type(self, t: Type) -> None:
        """Register the packages needed to refer to ``t``."""
        for path in _packages_in(t):
            self.local_name_of(path)

    def local_name_of(self, path: str) -> str:
        """Return the local name of ``path``, registering the package if new."""
        name = self._by_path.get(path)
        if name is None:
            name = self._choose_name(path)
            self._by_path[path] = name
            self._taken.add(name)
        return name

    def _choose_name(self, path: str) -> str:
        dirs = [d for d in path.split("/") if d]
        candidate = ""
        for start in range(len(dirs) - 1, -1, -1):
            candidate = _sanitize("".join(dirs[start:])).lower()
            if candidate and candidate[0].isdigit():
                candidate = "_" + candidate
            if candidate and candidate not in self._taken:
                return candidate
        base = candidate or "pkg"
        suffix = 2
        while f"{base}{suffix}" in self._taken:
            suffix += 1
        return f"{base}{suffix}"

    def import_lines(self) -> list[str]:
        """Return ``name "path"`` lines for all packages, ordered by path."""
        return [f'{name} "{path}"' for path, name in sorted(self._by_path.items())]


def _default_qualifier(path: str) -> str:
    return _sanitize(path.rsplit("/", 1)[-1]).lower()


def _array_prefix(t: Type) -> str:
    text = t.name.name
    end = text.find("]")
    if text.startswith("[") and end > 0:
        return text[: end + 1]
    return "[...]"


def raw_name(
    t: Type, local_package: str = "", imports: ImportTracker | None = None
) -> str:
    """Return the source-level spelling of ``t`` as seen from ``local_package``.

    Types from other packages are qualified with the local name that
    ``imports`` assigns to their package, registering it there.
    """
    package = t.name.package
    if package:
        if package == local_package:
            return t.name.name
        if imports is not None:
            qualifier = imports.local_name_of(package)
        else:
            qualifier = _default_qualifier(package)
        return f"{qualifier}.{t.name.name}"

    if t.elem is not None:
        elem = raw_name(t.elem, local_package, imports)
        if t.kind is Kind.POINTER:
            return "*" + elem
        if t.kind is Kind.SLICE:
            return "[]" + elem
        if t.kind is Kind.MAP and t.key is not None:
            return f"map[{raw_name(t.key, local_package, imports)}]{elem}"
        if t.kind is Kind.ARRAY:
            return _array_prefix(t) + elem
        if t.kind is Kind.CHAN:
            return "chan " + elem
    return t.name.name


def _public_segment(segment: str) -> str:
    return segment.replace("-", "_").replace(".", "")


def _public_parts(t: Type) -> list[str]:
    package = t.name.package
    if package:
        return [_public_segment(package.rsplit("/", 1)[-1]), t.name.name]
    if t.elem is not None:
        elem = _public_parts(t.elem)
        if t.kind is Kind.POINTER:
            return ["Pointer", "to", *elem]
        if t.kind is Kind.SLICE:
            return ["Slice", "of", *elem]
        if t.kind is Kind.MAP and t.key is not None:
            return ["Map", "of", *_public_parts(t.key), "to", *elem]
        if t.kind is Kind.ARRAY:
            return ["Array", "of", *elem]
        if t.kind is Kind.CHAN:
            return ["Chan", "of", *elem]
    return [t.name.name]


def public_name(t: Type) -> str:
    """Return an identifier for ``t``: its package's last directory and its name, joined by ``_``."""
    return "_".join(_public_parts(t))