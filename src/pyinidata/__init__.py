# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 20:01:52
# @Author : Kariko Lin

import logging

from .ini import (
    DuplicatePropertiesBehaviour,
    IniData,
    IniDataFormatter,
    IniDataParser,
    IniFileParser,
    IniFormattingConfiguration,
    IniParseError,
    IniParserConfiguration,
    IniScheme,
    InvalidIniName,
    Property,
    PropertyCollection,
    Section,
    SectionCollection
)

__all__ = [
    'IniData', 'Section', 'SectionCollection',
    'Property', 'PropertyCollection',
    'IniDataParser', 'IniFileParser', 'IniDataFormatter',
    'IniParserConfiguration', 'IniScheme', 'IniFormattingConfiguration',
    'DuplicatePropertiesBehaviour',
    'IniParseError', 'InvalidIniName'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
