# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2026/10/19 21:03:11
# @Author : Kariko Lin

"""Parse-time policy, recognition tokens and output options.

All three are plain value records. They can be cloned and overwritten
field by field, and none of them keeps a reference to a document.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Self


class DuplicatePropertiesBehaviour(Enum):
    """What to do when a key shows up twice in the same section."""
    DISALLOW_AND_STOP_WITH_ERROR = 0
    ALLOW_AND_KEEP_FIRST_VALUE = 1
    ALLOW_AND_KEEP_LAST_VALUE = 2
    # values joined with `concatenate_duplicate_properties_string`.
    ALLOW_AND_CONCATENATE_VALUES = 3


class _Overwritable:
    def overwrite_with(self, source: Self | None) -> None:
        """Copy every option of `source` onto this instance.

        Does nothing if `source` is `None`.
        """
        if source is None:
            return
        for f in fields(self):
            setattr(self, f.name, getattr(source, f.name))

    def deep_clone(self) -> Self:
        ret = type(self)()
        ret.overwrite_with(self)
        return ret


@dataclass(kw_only=True)
class IniParserConfiguration(_Overwritable):
    """How liberal the parser should be with "strange" files.

    - `case_insensitive`: section and key lookup ignores case.
    - `allow_keys_without_section`: keys before the first header
    go to `IniData.global_properties` instead of failing.
    - `duplicate_properties_behaviour` and
    `concatenate_duplicate_properties_string`: repeated keys.
    - `throw_exceptions_on_error`: raise `IniParseError`,
    or just return `None` from the parser.
    - `allow_duplicate_sections`: reuse a section on a repeated header.
    - `skip_invalid_lines`: drop lines that are neither
    comment, section header nor property.
    - `trim_properties`, `trim_sections`: strip whitespace around
    keys, values and section names.
    """
    case_insensitive: bool = False
    allow_keys_without_section: bool = True
    duplicate_properties_behaviour: DuplicatePropertiesBehaviour = (
        DuplicatePropertiesBehaviour.DISALLOW_AND_STOP_WITH_ERROR)
    concatenate_duplicate_properties_string: str = ';'
    throw_exceptions_on_error: bool = True
    allow_duplicate_sections: bool = False
    skip_invalid_lines: bool = False
    trim_properties: bool = True
    trim_sections: bool = True


@dataclass(kw_only=True)
class IniScheme(_Overwritable):
    """Tokens the parser recognizes, e.g. `#` only comments,
    or `key: value` pairs with `property_assignment=':'`."""
    comment_strings: tuple[str, ...] = (';', '#')
    section_start: str = '['
    section_end: str = ']'
    property_assignment: str = '='

    def __post_init__(self) -> None:
        # a bare str would be iterated char by char.
        if isinstance(self.comment_strings, str):
            self.comment_strings = (self.comment_strings,)
        else:
            self.comment_strings = tuple(self.comment_strings)


@dataclass(kw_only=True)
class IniFormattingConfiguration(_Overwritable):
    assignment_spacer: str = ' '
    newline: str = '\n'
    blank_lines: int = 1  # between sections
    # None means the first of `IniScheme.comment_strings`.
    comment_string: str | None = field(default=None)
