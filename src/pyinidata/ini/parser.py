# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 22:41:17
# @Author : Kariko Lin

"""Line based INI reader.

Each line is one of: blank, comment, `[section]`, `key = value`,
or malformed. Comments are buffered and attached to the next
section or property; trailing comments at the end of input are dropped.

How strict the reader is depends on `IniParserConfiguration`,
and what counts as comment / section / pair on `IniScheme`.
"""

import logging
from collections.abc import Iterable
from io import StringIO, TextIOBase
from os import PathLike

import chardet

from ..abstract import FileHandler
from .config import (
    DuplicatePropertiesBehaviour,
    IniFormattingConfiguration,
    IniParserConfiguration,
    IniScheme
)
from .formatter import IniDataFormatter
from .model import IniData, Property, Section

logger = logging.getLogger(__name__)


class IniParseError(Exception):
    """To record errors when reading INI text."""

    def __init__(self, message: str, line_number: int, line: str) -> None:
        super().__init__(f'{message} (line {line_number}: {line!r})')
        self.line_number = line_number
        self.line = line


class IniDataParser:
    def __init__(
        self,
        configuration: IniParserConfiguration | None = None,
        scheme: IniScheme | None = None
    ) -> None:
        # own copies, so later changes by the caller won't leak in.
        self.configuration = IniParserConfiguration()
        self.configuration.overwrite_with(configuration)
        self.scheme = IniScheme()
        self.scheme.overwrite_with(scheme)
        self.errors: list[IniParseError] = []

        self._data = IniData()
        self._current: Section | None = None
        self._comments: list[str] = []

    @property
    def has_error(self) -> bool:
        return len(self.errors) > 0

    def parse(self, text: str) -> IniData | None:
        # only real line breaks; str.splitlines() also cuts at \x0c, \x85...
        return self.parse_lines(StringIO(text, newline=None))

    def parse_stream(self, buf: TextIOBase) -> IniData | None:
        """Read from an already decoded text stream."""
        return self.parse_lines(buf)

    def parse_lines(self, lines: Iterable[str]) -> IniData | None:
        """Build an `IniData` out of `lines`.

        On a malformed input, raises `IniParseError` if
        `configuration.throw_exceptions_on_error`, otherwise
        returns `None` and keeps the error in `self.errors`.
        """
        self.errors = []
        ret = self._data = IniData(
            case_insensitive=self.configuration.case_insensitive)
        self._current = None
        self._comments = []
        try:
            for lineno, line in enumerate(lines, 1):
                if lineno == 1:
                    line = line.removeprefix('\ufeff')
                self._process_line(lineno, line.rstrip('\r\n'))
        except IniParseError as e:
            self.errors.append(e)
            logger.warning('INI parsing stopped: %s', e)
            if self.configuration.throw_exceptions_on_error:
                raise
            return None
        finally:
            # never keep a half-built document around.
            self._data = IniData()
            self._current = None
            self._comments = []
        return ret

    # recognition rules. override these for a really different dialect.
    def is_comment(self, line: str) -> bool:
        return line.lstrip().startswith(self.scheme.comment_strings)

    def is_section(self, line: str) -> bool:
        return line.strip().startswith(self.scheme.section_start)

    def is_property(self, line: str) -> bool:
        return self.scheme.property_assignment in line

    def _process_line(self, lineno: int, line: str) -> None:
        if not line.strip():
            return
        if self.is_comment(line):
            self._process_comment(line)
        elif self.is_section(line):
            self._process_section(lineno, line)
        elif self.is_property(line):
            self._process_property(lineno, line)
        else:
            self._invalid_line(lineno, line, 'Unrecognized line')

    def _invalid_line(self, lineno: int, line: str, reason: str) -> None:
        if not self.configuration.skip_invalid_lines:
            raise IniParseError(reason, lineno, line)
        logger.debug('Skipped invalid line %d (%s): %r', lineno, reason, line)

    def _process_comment(self, line: str) -> None:
        line = line.lstrip()
        for lead in self.scheme.comment_strings:
            if line.startswith(lead):
                self._comments.append(line[len(lead):])
                return

    def _process_section(self, lineno: int, line: str) -> None:
        stripped = line.strip()
        start = len(self.scheme.section_start)
        end = stripped.find(self.scheme.section_end, start)
        if end < 0:
            self._invalid_line(lineno, line, 'No closing section bracket')
            return
        name = stripped[start:end]
        if self.configuration.trim_sections:
            name = name.strip()
        if not name.strip():
            self._invalid_line(lineno, line, 'Empty section name')
            return

        sections = self._data.sections
        if not sections.add_section(name):
            if not self.configuration.allow_duplicate_sections:
                raise IniParseError(
                    f'Duplicate section [{name}]', lineno, line)
            logger.debug('Section [%s] reopened at line %d.', name, lineno)
        self._current = sections[name]
        # reused section: keep its comments, append the new ones.
        self._current.comments.extend(self._comments)
        self._comments.clear()

    def _process_property(self, lineno: int, line: str) -> None:
        key, value = line.split(self.scheme.property_assignment, 1)
        if self.configuration.trim_properties:
            key, value = key.strip(), value.strip()
        if not key.strip():
            self._invalid_line(lineno, line, 'Property without key')
            return

        if self._current is not None:
            target = self._current.properties
        elif self.configuration.allow_keys_without_section:
            target = self._data.global_properties
        else:
            raise IniParseError(
                'Property outside of any section', lineno, line)

        if (existing := target.get_property(key)) is None:
            target.add_key_and_value(key, value).comments = self._comments
        else:
            self._handle_duplicate(existing, value, lineno, line)
            existing.comments.extend(self._comments)
        self._comments.clear()

    def _handle_duplicate(
        self, existing: Property, value: str,
        lineno: int, line: str
    ) -> None:
        match self.configuration.duplicate_properties_behaviour:
            case DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_FIRST_VALUE:
                pass
            case DuplicatePropertiesBehaviour.ALLOW_AND_KEEP_LAST_VALUE:
                existing.value = value
            case DuplicatePropertiesBehaviour.ALLOW_AND_CONCATENATE_VALUES:
                existing.value = (
                    existing.value
                    + self.configuration.concatenate_duplicate_properties_string
                    + value)
            case _:
                raise IniParseError(
                    f'Duplicate key "{existing.key}"', lineno, line)


class IniFileParser(FileHandler[IniData | None]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None, *,
        configuration: IniParserConfiguration | None = None,
        scheme: IniScheme | None = None,
        formatting: IniFormattingConfiguration | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self.parser = IniDataParser(configuration, scheme)
        self.formatter = IniDataFormatter(scheme, formatting)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        logger.info('Decoding %s as %s.', filename, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            logger.warning('Failed to decode %s, using latin-1.', filename)
            buf = raw.decode('latin-1')
        return StringIO(buf, newline=None)

    def read(self) -> IniData | None:
        """Read the file this `IniFileParser` points to.

        Returns `None` when parsing fails and
        `throw_exceptions_on_error` is off; see `self.parser.errors`.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.parser.parse_stream(fp)
        except UnicodeDecodeError:
            return self.parser.parse_stream(self._decode_file(self._fn))

    def write(self, instance: IniData | None) -> None:
        if instance is None:
            raise ValueError('Nothing to write.')
        with open(
            self._fn, 'w', encoding=self._codec or 'utf-8', newline=''
        ) as fp:
            fp.write(self.formatter.format(instance))

    def __str__(self) -> str:
        return f'INI file: {super().__str__()} ({self._codec})'
