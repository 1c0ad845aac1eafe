# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 21:01:53
# @Author : Kariko Lin

from .config import (
    DuplicatePropertiesBehaviour,
    IniFormattingConfiguration,
    IniParserConfiguration,
    IniScheme
)
from .formatter import IniDataFormatter
from .model import (
    IniData,
    InvalidIniName,
    Property,
    PropertyCollection,
    Section,
    SectionCollection
)
from .parser import IniDataParser, IniFileParser, IniParseError
