"""Code style settings.

Attribute names follow Python conventions; ``to_map`` emits the IDE's own
option names (``RIGHT_MARGIN``, ``IF_BRACE_FORCE`` ...). Unset options are
written as ``null`` so the IDE keeps its defaults.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


class ForceBraces(Enum):
    DO_NOT_FORCE = "DO_NOT_FORCE"
    FORCE_BRACES_IF_MULTILINE = "FORCE_BRACES_IF_MULTILINE"
    FORCE_BRACES_ALWAYS = "FORCE_BRACES_ALWAYS"


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


@dataclass
class LanguageCodeStyleConfig:
    """Options shared by all languages."""
    hard_wrap_at: Optional[int] = None
    wrap_comments_at_right_margin: Optional[bool] = None
    if_force_braces: Optional[ForceBraces] = None
    do_while_force_braces: Optional[ForceBraces] = None
    while_force_braces: Optional[ForceBraces] = None
    for_force_braces: Optional[ForceBraces] = None
    keep_control_statement_in_one_line: Optional[bool] = None
    class_count_to_use_import_on_demand: Optional[int] = None

    def to_map(self) -> dict:
        return {
            "RIGHT_MARGIN": self.hard_wrap_at,
            "WRAP_COMMENTS": self.wrap_comments_at_right_margin,
            "IF_BRACE_FORCE": _enum_value(self.if_force_braces),
            "DOWHILE_BRACE_FORCE": _enum_value(self.do_while_force_braces),
            "WHILE_BRACE_FORCE": _enum_value(self.while_force_braces),
            "FOR_BRACE_FORCE": _enum_value(self.for_force_braces),
            "KEEP_CONTROL_STATEMENT_IN_ONE_LINE": self.keep_control_statement_in_one_line,
            "CLASS_COUNT_TO_USE_IMPORT_ON_DEMAND": self.class_count_to_use_import_on_demand,
        }


@dataclass
class JavaCodeStyleConfig(LanguageCodeStyleConfig):
    """Java options, including the Javadoc formatting flags."""
    align_param_comments: Optional[bool] = None
    align_exception_comments: Optional[bool] = None
    generate_p_on_empty_lines: Optional[bool] = None
    keep_empty_param_tags: Optional[bool] = None
    keep_empty_throws_tags: Optional[bool] = None
    keep_empty_return_tags: Optional[bool] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result.update({
            "JD_ALIGN_PARAM_COMMENTS": self.align_param_comments,
            "JD_ALIGN_EXCEPTION_COMMENTS": self.align_exception_comments,
            "JD_P_AT_EMPTY_LINES": self.generate_p_on_empty_lines,
            "JD_KEEP_EMPTY_PARAMETER": self.keep_empty_param_tags,
            "JD_KEEP_EMPTY_EXCEPTION": self.keep_empty_throws_tags,
            "JD_KEEP_EMPTY_RETURN": self.keep_empty_return_tags,
        })
        return result


@dataclass
class GroovyCodeStyleConfig(LanguageCodeStyleConfig):
    align_multiline_named_arguments: Optional[bool] = None

    def to_map(self) -> dict:
        result = super().to_map()
        result["ALIGN_NAMED_ARGS_IN_MAP"] = self.align_multiline_named_arguments
        return result


@dataclass
class CodeStyleConfig:
    """Project code style: a few global options plus per-language sections.

    Language sections are created on first use and serialized in the order
    they were first configured::

        style.java(lambda java: setattr(java, "hard_wrap_at", 120))
    """
    use_same_indents: Optional[bool] = None
    hard_wrap_at: Optional[int] = None
    keep_control_statement_in_one_line: Optional[bool] = None
    languages: dict = field(default_factory=dict)

    def java(self, configure: Optional[Callable] = None) -> JavaCodeStyleConfig:
        return self._language("java", JavaCodeStyleConfig, configure)

    def groovy(self, configure: Optional[Callable] = None) -> GroovyCodeStyleConfig:
        return self._language("groovy", GroovyCodeStyleConfig, configure)

    def _language(self, name, factory, configure):
        lang = self.languages.get(name)
        if lang is None:
            lang = self.languages[name] = factory()
        if configure is not None:
            configure(lang)
        return lang

    def to_map(self) -> dict:
        return {
            "USE_SAME_INDENTS": self.use_same_indents,
            "RIGHT_MARGIN": self.hard_wrap_at,
            "KEEP_CONTROL_STATEMENT_IN_ONE_LINE": self.keep_control_statement_in_one_line,
            "languages": {name: lang.to_map() for name, lang in self.languages.items()},
        }
