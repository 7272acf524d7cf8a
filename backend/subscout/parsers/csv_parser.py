"""
CSV file parser.
"""

import csv
import logging
from pathlib import Path
from typing import List, Dict, Any, Optional
from datetime import datetime
from decimal import Decimal, InvalidOperation
import re

from subscout.parsers.base import BaseParser

logger = logging.getLogger(__name__)

# Header names seen in common bank/card exports, lowercased
HEADER_ALIASES = {
    'date_col': ['date', 'transaction date', 'posted date', 'posting date'],
    'amount_col': ['amount', 'transaction amount'],
    'description_col': ['description', 'name', 'transaction description', 'payee', 'memo'],
    'merchant_col': ['merchant', 'merchant name'],
    'category_col': ['category'],
    'debit_col': ['debit', 'withdrawal', 'withdrawals'],
    'credit_col': ['credit', 'deposit', 'deposits'],
}


class CSVParser(BaseParser):
    """Parser for CSV bank/card exports"""

    extensions = ('.csv',)

    def detect_mapping(self, headers: List[str]) -> Dict[str, Any]:
        """Map known header names to column indexes"""
        normalized = [h.strip().lower() for h in headers]
        mapping: Dict[str, Any] = {'expenses_negative': True}

        for field, aliases in HEADER_ALIASES.items():
            mapping[field] = next(
                (normalized.index(alias) for alias in aliases if alias in normalized),
                None
            )

        if mapping['date_col'] is None or mapping['description_col'] is None:
            raise ValueError(f"Could not find date and description columns in headers: {headers}")
        has_split = mapping['debit_col'] is not None and mapping['credit_col'] is not None
        if mapping['amount_col'] is None and not has_split:
            raise ValueError(f"Could not find an amount column in headers: {headers}")

        return mapping

    def parse(
        self,
        file_path: Path,
        column_mapping: Optional[Dict[str, Any]] = None,
        date_format: str = "%m/%d/%Y"
    ) -> List[Dict[str, Any]]:
        """Parse CSV and return transaction dicts"""
        transactions = []

        with open(file_path, 'r', encoding='utf-8-sig') as f:
            try:
                dialect = csv.Sniffer().sniff(f.read(8192))
                f.seek(0)
            except csv.Error:
                dialect = csv.excel
                f.seek(0)

            reader = csv.reader(f, dialect)
            headers = next(reader, [])
            mapping = column_mapping or self.detect_mapping(headers)

            for row in reader:
                if not row or all(cell.strip() == '' for cell in row):
                    continue

                try:
                    txn = self._parse_row(row, mapping, date_format)
                    if txn:
                        transactions.append(txn)
                except (ValueError, IndexError) as e:
                    logger.warning(f"Error parsing row {row}: {e}")
                    continue

        return transactions

    def _parse_row(
        self,
        row: List[str],
        mapping: Dict[str, Any],
        date_format: str
    ) -> Optional[Dict[str, Any]]:
        """Parse a single row into a transaction dict"""

        date_str = row[mapping['date_col']].strip()
        txn_date = datetime.strptime(date_str, date_format).date()

        amount = self._parse_amount(row, mapping)
        if amount is None:
            return None

        description = row[mapping['description_col']].strip()

        return {
            'date': txn_date,
            'amount': amount,
            'raw_description': description,
            'merchant_name': self._optional_cell(row, mapping.get('merchant_col')),
            'category': self._optional_cell(row, mapping.get('category_col')),
        }

    def _parse_amount(
        self,
        row: List[str],
        mapping: Dict[str, Any]
    ) -> Optional[Decimal]:
        """Parse amount as outflow-positive"""

        if mapping.get('debit_col') is not None and mapping.get('credit_col') is not None:
            debit = self._clean_amount(row[mapping['debit_col']])
            credit = self._clean_amount(row[mapping['credit_col']])

            if debit and debit > 0:
                return debit
            elif credit and credit > 0:
                return -credit
            return Decimal('0')

        amount = self._clean_amount(row[mapping['amount_col']])
        if amount is None:
            return None
        return -amount if mapping.get('expenses_negative', True) else amount

    def _clean_amount(self, amount_str: str) -> Optional[Decimal]:
        """Clean and parse amount string"""
        if not amount_str or not amount_str.strip():
            return None

        amount_str = amount_str.strip()

        if amount_str.startswith('(') and amount_str.endswith(')'):
            amount_str = '-' + amount_str[1:-1]

        amount_str = re.sub(r'[$,]', '', amount_str)

        try:
            return Decimal(amount_str)
        except InvalidOperation:
            return None

    def _optional_cell(self, row: List[str], index: Optional[int]) -> Optional[str]:
        if index is None or index >= len(row):
            return None
        return row[index].strip() or None
