# -*- encoding: utf-8 -*-
# @File   : formatter.py
# @Time   : 2026/10/19 22:10:05
# @Author : Kariko Lin

from typing import TYPE_CHECKING
from warnings import warn

from .config import IniFormattingConfiguration, IniScheme

if TYPE_CHECKING:
    from .model import IniData, PropertyCollection


class IniDataFormatter:
    """Turns an `IniData` back into INI text.

    Only the content survives: comments, sections and pairs in their order.
    Original spacing is not kept.

    Names that would read back differently are still written as they
    are, but with a warning: keys holding the assignment token or
    starting like a comment or a header, and section names holding
    the closing token.
    """

    def __init__(
        self,
        scheme: IniScheme | None = None,
        formatting: IniFormattingConfiguration | None = None
    ) -> None:
        self.scheme = IniScheme() if scheme is None else scheme.deep_clone()
        self.formatting = (
            IniFormattingConfiguration() if formatting is None
            else formatting.deep_clone())

    @property
    def _comment_lead(self) -> str:
        if self.formatting.comment_string is not None:
            return self.formatting.comment_string
        return self.scheme.comment_strings[0]

    def __check_key(self, key: str) -> None:
        leads = (*self.scheme.comment_strings, self.scheme.section_start)
        if (self.scheme.property_assignment in key
                or key.lstrip().startswith(leads)):
            warn(f'Key {key!r} will not be read back as the same key.')

    def __check_section(self, name: str) -> None:
        if self.scheme.section_end in name:
            warn(f'Section name {name!r} will be cut short when read back.')

    def __comments2lines(self, comments: list[str]) -> list[str]:
        return [f'{self._comment_lead}{i}' for i in comments]

    def __pairs2lines(self, pairs: 'PropertyCollection') -> list[str]:
        spacer = self.formatting.assignment_spacer
        assign = self.scheme.property_assignment
        ret = []
        for i in pairs.properties():
            self.__check_key(i.key)
            ret.extend(self.__comments2lines(i.comments))
            ret.append(f'{i.key}{spacer}{assign}{spacer}{i.value}')
        return ret

    def format(self, data: 'IniData') -> str:
        blocks: list[list[str]] = []
        if len(data.global_properties) > 0:
            blocks.append(self.__pairs2lines(data.global_properties))
        for sect in data.sections.values():
            self.__check_section(sect.name)
            lines = self.__comments2lines(sect.comments)
            lines.append(
                f'{self.scheme.section_start}{sect.name}'
                f'{self.scheme.section_end}')
            lines.extend(self.__pairs2lines(sect.properties))
            blocks.append(lines)

        nl = self.formatting.newline
        sep = nl * (self.formatting.blank_lines + 1)
        ret = sep.join(nl.join(i) for i in blocks)
        return ret + nl if ret else ret
