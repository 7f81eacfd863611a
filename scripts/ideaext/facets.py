"""Module-level IDE settings: facets and package prefixes."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class SpringContext:
    """A Spring application context file, optionally with a parent context."""
    name: str
    file: Optional[str] = None
    parent: Optional[str] = None

    def to_map(self) -> dict:
        return {"name": self.name, "file": self.file, "parent": self.parent}


class Facet:
    type = None

    def __init__(self, name: str):
        self.name = name

    def to_map(self) -> dict:
        return {"type": self.type, "name": self.name}


class SpringFacet(Facet):
    type = "spring"

    def __init__(self, name: str):
        super().__init__(name)
        self.contexts = OrderedDict()

    def context(self, name: str, configure: Optional[Callable] = None) -> SpringContext:
        ctx = self.contexts.get(name)
        if ctx is None:
            ctx = self.contexts[name] = SpringContext(name)
        if configure is not None:
            configure(ctx)
        return ctx

    def to_map(self) -> dict:
        result = super().to_map()
        result["contexts"] = [c.to_map() for c in self.contexts.values()]
        return result


class ModuleSettings:
    """IDE settings of one module.

    Attributes:
        module_name: The module these settings belong to.
        facets: Facet name to Facet, in creation order.
        package_prefix: Source directory (project relative) to package prefix.
    """

    def __init__(self, module_name: str):
        self.module_name = module_name
        self.facets = OrderedDict()
        self.package_prefix = OrderedDict()

    def spring(self, name: str = "Spring", configure: Optional[Callable] = None) -> SpringFacet:
        facet = self.facets.get(name)
        if facet is None:
            facet = self.facets[name] = SpringFacet(name)
        if configure is not None:
            configure(facet)
        return facet

    def to_map(self) -> dict:
        result = {"moduleName": self.module_name}
        if self.facets:
            result["facets"] = [f.to_map() for f in self.facets.values()]
        if self.package_prefix:
            result["packagePrefix"] = dict(self.package_prefix)
        return result
