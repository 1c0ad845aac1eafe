# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 21:26:40
# @Author : Kariko Lin

"""
Basically INI structure, with comments kept along with
the sections and properties they precede.

    ```ini
    key = val  ; global property, see `IniData.global_properties`.

    ; section comment
    [section]
    ; property comment
    key233 = val666
    ```

Every object handed into a collection (or merged from another one)
is copied, so two documents never share a section or a property.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Self
from warnings import warn

from .formatter import IniDataFormatter


class InvalidIniName(ValueError):
    """Raised when building a property or section with an empty name."""
    pass


def _check_name(name: str, what: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidIniName(f'{what} name must not be empty, got {name!r}.')


class Property:
    """A key/value pair, plus the comment lines just above it."""

    def __init__(
        self, key: str, value: str = '',
        comments: Iterable[str] | None = None
    ) -> None:
        _check_name(key, 'Property')
        self.__key = key
        self.value = value
        self.comments = comments

    @property
    def key(self) -> str:
        return self.__key

    @property
    def value(self) -> str:
        return self.__value

    @value.setter
    def value(self, value: str | None) -> None:
        self.__value = '' if value is None else value

    @property
    def comments(self) -> list[str]:
        return self.__comments

    @comments.setter
    def comments(self, comments: Iterable[str] | None) -> None:
        # never keep the caller's list.
        self.__comments = [] if comments is None else list(comments)

    def deep_clone(self) -> 'Property':
        return Property(self.__key, self.__value, self.__comments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return (self.key, self.value, self.comments) == \
            (other.key, other.value, other.comments)

    def __repr__(self) -> str:
        return f'Property({self.key!r}, {self.value!r})'


class PropertyCollection(MutableMapping[str, str]):
    """Ordered `key: value` dict of one section (or of the global scope).

    Item access works on plain strings. Use `get_property()` for the
    whole `Property` with its comments.

    With `case_insensitive=True`, keys are compared ignoring case
    but iteration still yields them as they were first written.
    """

    def __init__(
        self, pairs: Mapping[str, str] | None = None, *,
        case_insensitive: bool = False
    ) -> None:
        self.__case_insensitive = case_insensitive
        self.__data: dict[str, Property] = {}
        if pairs:
            self.update(pairs)

    @property
    def case_insensitive(self) -> bool:
        return self.__case_insensitive

    def _fold(self, key: str) -> str:
        return key.upper() if self.__case_insensitive else key

    def __getitem__(self, key: str) -> str:
        return self.__data[self._fold(key)].value

    def __setitem__(self, key: str, value: str) -> None:
        self.add_key_and_value(key, value)

    def __delitem__(self, key: str) -> None:
        del self.__data[self._fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self.__data

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[str]:
        return (i.key for i in self.__data.values())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertyCollection):
            # keys ignore case only if both sides do.
            fold = self.__case_insensitive and other.case_insensitive
            return self._signature(fold) == other._signature(fold)
        return super().__eq__(other)

    def _signature(self, fold: bool) -> list[tuple[str, str, list[str]]]:
        return [
            (i.key.upper() if fold else i.key, i.value, i.comments)
            for i in self.__data.values()]

    def __repr__(self) -> str:
        return f'PropertyCollection({dict(self.items())!r})'

    def add_key_and_value(self, key: str, value: str = '') -> Property:
        """Add a new property, or overwrite the value of an existing one."""
        folded = self._fold(key)
        if folded in self.__data:
            self.__data[folded].value = value
        else:
            self.__data[folded] = Property(key, value)
        return self.__data[folded]

    def add_property(self, prop: Property) -> bool:
        """Add a copy of `prop`. `False` if the key exists already."""
        if prop.key in self:
            return False
        self.__data[self._fold(prop.key)] = prop.deep_clone()
        return True

    def set_property(self, prop: Property) -> None:
        """Add or replace with a copy of `prop`, comments included.

        An existing key keeps its position and spelling.
        """
        folded = self._fold(prop.key)
        if folded in self.__data:
            self.__data[folded].value = prop.value
            self.__data[folded].comments = prop.comments
        else:
            self.__data[folded] = prop.deep_clone()

    def get_property(self, key: str) -> Property | None:
        return self.__data.get(self._fold(key))

    def properties(self) -> Iterator[Property]:
        return iter(self.__data.values())

    def remove(self, key: str) -> bool:
        return self.__data.pop(self._fold(key), None) is not None

    def merge(self, other: 'PropertyCollection') -> None:
        """Merge `other` into self.

        Values of `other` win on conflicting keys, and its comments
        are appended to ours. New keys go to the end.
        """
        for i in other.properties():
            cur = self.add_key_and_value(i.key, i.value)
            cur.comments.extend(i.comments)

    def clear_comments(self) -> None:
        for i in self.__data.values():
            i.comments.clear()

    def deep_clone(self) -> 'PropertyCollection':
        ret = PropertyCollection(case_insensitive=self.__case_insensitive)
        for i in self.__data.values():
            ret.add_property(i)
        return ret


class Section:
    """A named `PropertyCollection`, with the comments above its header.

    Item access goes straight to the properties:
    `section['key']` is `section.properties['key']`.
    """

    def __init__(self, name: str, *, case_insensitive: bool = False) -> None:
        _check_name(name, 'Section')
        self.__name = name
        self.__properties = PropertyCollection(
            case_insensitive=case_insensitive)
        self.__comments: list[str] = []

    @property
    def name(self) -> str:
        return self.__name

    @property
    def properties(self) -> PropertyCollection:
        return self.__properties

    @property
    def comments(self) -> list[str]:
        return self.__comments

    @comments.setter
    def comments(self, comments: Iterable[str] | None) -> None:
        self.__comments = [] if comments is None else list(comments)

    def __getitem__(self, key: str) -> str:
        return self.__properties[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.__properties[key] = value

    def __delitem__(self, key: str) -> None:
        del self.__properties[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__properties

    def __len__(self) -> int:
        return len(self.__properties)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        fold = (self.properties.case_insensitive
                and other.properties.case_insensitive)
        if fold:
            same_name = self.name.upper() == other.name.upper()
        else:
            same_name = self.name == other.name
        return same_name and (self.comments, self.properties) == \
            (other.comments, other.properties)

    def __str__(self) -> str:
        return f'[{self.__name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.__name, len(self.__properties))

    def merge(self, other: 'Section') -> None:
        self.__comments.extend(other.comments)
        self.__properties.merge(other.properties)

    def clear_comments(self) -> None:
        self.__comments.clear()
        self.__properties.clear_comments()

    def deep_clone(self, name: str | None = None) -> 'Section':
        """Copy this section, optionally under another `name`."""
        ret = Section(
            self.__name if name is None else name,
            case_insensitive=self.__properties.case_insensitive)
        ret.merge(self)
        return ret


class SectionCollection(MutableMapping[str, Section]):
    """Ordered `name: Section` dict of a document."""

    def __init__(self, *, case_insensitive: bool = False) -> None:
        self.__case_insensitive = case_insensitive
        self.__data: dict[str, Section] = {}

    @property
    def case_insensitive(self) -> bool:
        return self.__case_insensitive

    def _fold(self, name: str) -> str:
        return name.upper() if self.__case_insensitive else name

    def __getitem__(self, name: str) -> Section:
        return self.__data[self._fold(name)]

    def __setitem__(
        self, name: str,
        value: Section | Mapping[str, str]
    ) -> None:
        """Store a copy of `value` as section `name`.

        `value` may be a `Section` (comments kept), a `PropertyCollection`
        or any plain mapping of strings.
        """
        if name in self:
            warn(f'Section [{name}] already exists and will be replaced.')
        sect = Section(name, case_insensitive=self.__case_insensitive)
        if isinstance(value, Section):
            sect.merge(value)
        elif isinstance(value, PropertyCollection):
            sect.properties.merge(value)
        else:
            sect.properties.update(value)
        self.__data[self._fold(name)] = sect

    def __delitem__(self, name: str) -> None:
        del self.__data[self._fold(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._fold(name) in self.__data

    def __len__(self) -> int:
        return len(self.__data)

    def __iter__(self) -> Iterator[str]:
        return (i.name for i in self.__data.values())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SectionCollection):
            return list(self.__data.values()) == list(other.values())
        return super().__eq__(other)

    def add_section(self, name: str) -> bool:
        """Create an empty section. `False` if it exists already."""
        if name in self:
            return False
        self.__data[self._fold(name)] = Section(
            name, case_insensitive=self.__case_insensitive)
        return True

    def get_section(self, name: str) -> Section | None:
        return self.__data.get(self._fold(name))

    def remove(self, name: str) -> bool:
        return self.__data.pop(self._fold(name), None) is not None

    def merge(self, other: 'SectionCollection') -> None:
        """Merge sections of `other` into self, recursively.

        Sections only in `other` are copied over.
        """
        for sect in other.values():
            self.add_section(sect.name)
            self[sect.name].merge(sect)

    def clear_comments(self) -> None:
        for i in self.__data.values():
            i.clear_comments()

    def deep_clone(self) -> 'SectionCollection':
        ret = SectionCollection(case_insensitive=self.__case_insensitive)
        ret.merge(self)
        return ret


class IniData:
    """A whole INI document.

    `data['section']` gives the properties of that section, while
    `data.sections` has the `Section` objects (and their comments).
    """

    def __init__(self, *, case_insensitive: bool = False) -> None:
        self.__case_insensitive = case_insensitive
        self.__sections = SectionCollection(case_insensitive=case_insensitive)
        # pairs not belonging to any section.
        self.__global = PropertyCollection(case_insensitive=case_insensitive)

    @property
    def case_insensitive(self) -> bool:
        return self.__case_insensitive

    @property
    def sections(self) -> SectionCollection:
        return self.__sections

    @property
    def global_properties(self) -> PropertyCollection:
        return self.__global

    def __getitem__(self, section: str) -> PropertyCollection:
        return self.__sections[section].properties

    def __contains__(self, section: object) -> bool:
        return section in self.__sections

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniData):
            return NotImplemented
        return (self.global_properties, self.sections) == \
            (other.global_properties, other.sections)

    def __str__(self) -> str:
        return IniDataFormatter().format(self)

    def find_key(self, path: str, separator: str = '.') -> str | None:
        """Look up `'section.key'`, or a global key if no separator.

        Only the first `separator` splits, so keys may contain it.
        """
        if separator not in path:
            return self.__global.get(path)
        section, key = path.split(separator, 1)
        if (sect := self.__sections.get_section(section)) is None:
            return None
        return sect.properties.get(key)

    def merge(self, other: 'IniData') -> None:
        """To merge `other` into self. Values of `other` win."""
        self.__global.merge(other.global_properties)
        self.__sections.merge(other.sections)

    def clear_all_comments(self) -> None:
        self.__global.clear_comments()
        self.__sections.clear_comments()

    def deep_clone(self) -> Self:
        ret = type(self)(case_insensitive=self.__case_insensitive)
        ret.merge(self)
        return ret
