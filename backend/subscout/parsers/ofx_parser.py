"""
OFX/QFX file parser.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Optional
from decimal import Decimal

from ofxparse import OfxParser as OFXParseLib

from subscout.parsers.base import BaseParser

logger = logging.getLogger(__name__)


class OFXParser(BaseParser):
    """Parser for OFX/QFX bank exports"""

    extensions = ('.ofx', '.qfx')

    def parse(
        self,
        file_path: Path,
        column_mapping: Optional[Dict[str, Any]] = None,
        date_format: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Parse OFX; mapping and date format are carried by the file itself"""
        transactions = []

        with open(file_path, 'rb') as f:
            ofx = OFXParseLib.parse(f)

        for account in ofx.accounts:
            statement = getattr(account, 'statement', None)
            if statement is None:
                logger.warning(f"OFX account {account.account_id} has no statement, skipping")
                continue

            for txn in statement.transactions:
                row = self._parse_transaction(txn)
                if row:
                    transactions.append(row)

        return transactions

    def _parse_transaction(self, txn) -> Optional[Dict[str, Any]]:
        amount = Decimal(str(txn.amount))
        if amount == 0:
            return None

        payee = (txn.payee or '').strip()
        memo = (txn.memo or '').strip()

        return {
            'date': txn.date.date() if isinstance(txn.date, datetime) else txn.date,
            # OFX signs debits negative
            'amount': -amount,
            'raw_description': payee or memo or f"Transaction {txn.id}",
            # PAYEE is usually the cleaned merchant when MEMO carries the raw line
            'merchant_name': payee if payee and memo else None,
            'category': None,
        }
