"""Package set stand-in supplied to modules as ``pkgs``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class Package:
    """Placeholder for a package referenced by a module.

    Attribute access yields nested packages (``pkgs.python3Packages.requests``)
    so modules can reference package attributes without anything being built.
    """

    name: str

    def __getattr__(self, attribute: str) -> "Package":
        if attribute.startswith("_"):
            raise AttributeError(attribute)
        return Package(f"{self.name}.{attribute}")

    def __str__(self) -> str:
        return f"pkgs.{self.name}"


class PackageSet:
    """Lenient package set returning a :class:`Package` for any attribute."""

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._packages: Dict[str, Package] = {name: Package(name) for name in names or ()}

    def __getattr__(self, name: str) -> Package:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Package:
        package = self._packages.get(name)
        if package is None:
            package = Package(name)
            self._packages[name] = package
        return package

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str)

    def __repr__(self) -> str:
        return f"PackageSet({len(self._packages)} referenced)"


__all__ = ["Package", "PackageSet"]
