"""
Base parser class for statement files.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional, Tuple
from pathlib import Path


class BaseParser(ABC):
    """
    Base class for statement parsers.

    Parsers return rows in the stored sign convention: positive amounts
    are money leaving the account, negative amounts are money coming in.
    """

    extensions: Tuple[str, ...] = ()

    def can_parse(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.extensions

    @abstractmethod
    def parse(
        self,
        file_path: Path,
        column_mapping: Optional[Dict[str, Any]] = None,
        date_format: str = "%m/%d/%Y"
    ) -> List[Dict[str, Any]]:
        """
        Parse file and return list of transaction dicts.
        Each dict has: date, amount, raw_description, merchant_name, category.
        """
        pass
