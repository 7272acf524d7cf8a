"""
Transaction sources feeding the detection engine.
"""

from subscout.sources.base import BaseTransactionSource
from subscout.sources.imported_file import ImportedFileSource
from subscout.sources.sync_feed import SyncFeedSource

__all__ = ["BaseTransactionSource", "ImportedFileSource", "SyncFeedSource"]
