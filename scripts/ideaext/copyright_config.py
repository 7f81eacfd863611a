"""Copyright profiles and their assignment to scopes."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class CopyrightProfile:
    """A named copyright notice template.

    Attributes:
        name: Profile name.
        notice: Notice text (may contain IDE velocity variables).
        keyword: Keyword that identifies an existing notice to replace.
        allow_replace_regexp: Regexp matching notices that may be replaced.
    """
    name: str
    notice: Optional[str] = None
    keyword: Optional[str] = None
    allow_replace_regexp: Optional[str] = None

    def to_map(self) -> dict:
        return {
            "name": self.name,
            "notice": self.notice,
            "keyword": self.keyword,
            "allowReplaceRegexp": self.allow_replace_regexp,
        }


class CopyrightConfiguration:
    def __init__(self):
        self.use_default: Optional[str] = None
        self.scopes: dict = {}
        self.profiles = OrderedDict()

    def profile(self, name: str, configure: Optional[Callable] = None) -> CopyrightProfile:
        """Get or create the profile called ``name`` and optionally configure it."""
        p = self.profiles.get(name)
        if p is None:
            p = self.profiles[name] = CopyrightProfile(name)
        if configure is not None:
            configure(p)
        return p

    def to_map(self) -> dict:
        result = {}
        if self.use_default is not None:
            result["useDefault"] = self.use_default
        result["scopes"] = dict(self.scopes)
        result["profiles"] = {name: p.to_map() for name, p in self.profiles.items()}
        return result
