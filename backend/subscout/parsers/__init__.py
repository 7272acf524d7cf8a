"""
Statement parsers, picked by file extension.
"""

from pathlib import Path
from typing import List, Optional

from subscout.parsers.base import BaseParser
from subscout.parsers.csv_parser import CSVParser
from subscout.parsers.ofx_parser import OFXParser

PARSERS: List[BaseParser] = [CSVParser(), OFXParser()]


def get_parser(file_path: Path) -> Optional[BaseParser]:
    """First registered parser that accepts the file, if any"""
    for parser in PARSERS:
        if parser.can_parse(file_path):
            return parser
    return None


def supported_extensions() -> List[str]:
    return [ext for parser in PARSERS for ext in parser.extensions]


__all__ = ['BaseParser', 'CSVParser', 'OFXParser', 'PARSERS', 'get_parser', 'supported_extensions']
