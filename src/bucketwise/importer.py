"""Loading of saved SimpleFIN exports and CSV export of results."""

import csv
import json
import logging
from pathlib import Path

from bucketwise.models import Account, Transaction
from bucketwise.simplefin import process_accounts
from bucketwise.utils import read_file

logger = logging.getLogger(__name__)

CSV_FIELDS = ["date", "description", "payee", "amount", "account", "currency", "bucket"]


class TransactionImporter:
    """
    Loads transactions from saved SimpleFIN /accounts JSON payloads.

    Usage:
        importer = TransactionImporter()
        transactions = importer.process_files([Path("2024-03.json"), Path("2024-04.json")])
        TransactionImporter.write_csv(categorized, Path("output.csv"))
    """

    def __init__(
        self,
        deduplicate: bool = True,
        sort_descending: bool = True,
    ) -> None:
        """
        Initialize importer.

        Args:
            deduplicate: Drop repeated (account, transaction id) pairs
            sort_descending: Sort by posted time, newest first
        """
        self.deduplicate = deduplicate
        self.sort_descending = sort_descending
        self._errors: list[tuple[Path, str]] = []
        self._accounts: dict[str, Account] = {}

    @property
    def errors(self) -> list[tuple[Path, str]]:
        """Get list of (filepath, error_message) for failed files."""
        return self._errors.copy()

    @property
    def accounts(self) -> list[Account]:
        """Accounts seen in the processed files, last file wins."""
        return list(self._accounts.values())

    def process_file(self, filepath: Path) -> list[Transaction]:
        """
        Process a single payload file and return its transactions.

        Args:
            filepath: Path to the JSON file

        Returns:
            List of Transaction objects (empty if the file failed)
        """
        try:
            payload = json.loads(read_file(filepath))
        except ValueError as e:
            self._errors.append((filepath, str(e)))
            return []

        if not isinstance(payload, dict) or not isinstance(payload.get("accounts"), list):
            self._errors.append((filepath, "Not a SimpleFIN accounts payload"))
            return []

        try:
            accounts, transactions = process_accounts(payload)
        except (AttributeError, TypeError, ValueError) as e:
            self._errors.append((filepath, f"Parse error: {e}"))
            return []

        for account in accounts:
            self._accounts[account.id] = account
        logger.debug("Loaded %d transactions from %s", len(transactions), filepath)
        return transactions

    def process_files(self, filepaths: list[Path]) -> list[Transaction]:
        """
        Process multiple files and return combined transactions.

        Args:
            filepaths: List of file paths

        Returns:
            List of Transaction objects (deduplicated and sorted if configured)
        """
        self._errors = []
        self._accounts = {}
        all_transactions: list[Transaction] = []

        for filepath in filepaths:
            all_transactions.extend(self.process_file(filepath))

        if self.deduplicate:
            all_transactions = self._deduplicate(all_transactions)

        if self.sort_descending:
            all_transactions.sort(key=lambda t: t.posted, reverse=True)

        return all_transactions

    def process_directory(self, directory: Path) -> list[Transaction]:
        """Process every JSON file in a directory."""
        files = sorted(set(directory.glob("*.json")) | set(directory.glob("*.JSON")))
        return self.process_files(files)

    def _deduplicate(self, transactions: list[Transaction]) -> list[Transaction]:
        """Remove repeated transactions, keeping the first seen."""
        seen: set[tuple[str, str]] = set()
        unique: list[Transaction] = []

        for tx in transactions:
            key = (tx.account_id, tx.id)
            if key not in seen:
                seen.add(key)
                unique.append(tx)

        return unique

    @staticmethod
    def write_csv(
        transactions: list[Transaction],
        output_path: Path,
        delimiter: str = ",",
    ) -> None:
        """
        Write transactions to a CSV file, with the bucket when categorized.

        Args:
            transactions: List of transactions
            output_path: Output file path
            delimiter: CSV delimiter (default comma)
        """
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=CSV_FIELDS,
                delimiter=delimiter,
                restval="",
                extrasaction="ignore",
            )
            writer.writeheader()
            for tx in transactions:
                writer.writerow(tx.to_dict())
