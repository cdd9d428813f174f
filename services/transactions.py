"""Transaction service for database operations."""

import sqlite3
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from models.transaction import MAX_DESCRIPTION_LENGTH, Transaction
from logger import get_logger

logger = get_logger("services")

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """id, transaction_date, description, amount,
       transaction_type, category_id, auto_category_id"""


class TransactionError(ValueError):
    """Raised when a transaction is invalid or cannot be found."""


def _row_to_transaction(row) -> Transaction:
    return Transaction(
        id=row[0],
        transaction_date=date.fromisoformat(row[1]),
        description=row[2],
        amount=Decimal(str(row[3])),
        type=row[4],
        category_id=row[5],
        auto_category_id=row[6],
    )


class TransactionService:
    """Service for managing transactions.

    Assigning a category to a transaction (on create or later) is recorded
    as a learned pattern through the pattern service.
    """

    def __init__(self, db_manager, patterns=None):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
            patterns: PatternService that records category assignments.
        """
        self.db_manager = db_manager
        self.patterns = patterns

    def _check_category(self, conn, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        row = conn.execute(
            "SELECT 1 FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        if row is None:
            raise TransactionError(f"Category with ID {category_id} not found")

    def _record(self, description: str, category_id: Optional[int]) -> None:
        """Record a category assignment as a learned pattern.

        The transaction is already committed at this point, so a failed
        pattern write is logged and never raised.
        """
        if category_id is None or self.patterns is None:
            return
        try:
            self.patterns.record_assignment(description, category_id)
        except sqlite3.Error as e:
            logger.warning(
                f"Could not record pattern for '{description}' -> category {category_id}: {e}"
            )

    def create(
        self,
        description: str,
        amount,
        transaction_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> Transaction:
        """Create a transaction.

        Args:
            description: What the transaction was for (1-100 characters).
            amount: Positive for income, negative for expense. Never zero.
            transaction_date: Defaults to today.
            category_id: Optional category; recorded as a learned assignment.

        Returns:
            The created Transaction with id populated.

        Raises:
            TransactionError: If any field is invalid or the category doesn't exist.
        """
        description = (description or "").strip()
        if not description:
            raise TransactionError("Description cannot be empty")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise TransactionError(
                f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )

        try:
            amount = Decimal(str(amount))
            transaction_type = Transaction.type_for_amount(amount)
        except (InvalidOperation, ValueError) as e:
            raise TransactionError(f"Invalid amount '{amount}': {e}") from e

        transaction = Transaction(
            id=None,
            transaction_date=transaction_date or date.today(),
            description=description,
            amount=amount,
            type=transaction_type,
            category_id=category_id,
        )

        with self.db_manager.connect() as conn:
            self._check_category(conn, category_id)
            cursor = conn.execute(
                """
                INSERT INTO transactions (transaction_date, description, amount,
                    transaction_type, category_id)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    transaction.transaction_date.isoformat(),
                    transaction.description,
                    float(transaction.amount),
                    transaction.type,
                    transaction.category_id,
                ),
            )
            conn.commit()
            transaction.id = cursor.lastrowid

        self._record(description, category_id)
        return transaction

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            row = cursor.fetchone()
            return _row_to_transaction(row) if row else None

    def find_all(self) -> List[Transaction]:
        """Get all transactions, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions "
                "ORDER BY transaction_date DESC, id DESC"
            )
            return [_row_to_transaction(row) for row in cursor.fetchall()]

    def find_uncategorized(self) -> List[Transaction]:
        """Get transactions that have no category, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_TRANSACTION_SELECT_FIELDS} FROM transactions "
                "WHERE category_id IS NULL ORDER BY transaction_date DESC, id DESC"
            )
            return [_row_to_transaction(row) for row in cursor.fetchall()]

    def update_category(self, transaction_id: int, category_id: int) -> Transaction:
        """Assign a category to a transaction and record the assignment.

        Raises:
            TransactionError: If the transaction or category doesn't exist.
        """
        transaction = self.find(transaction_id)
        if transaction is None:
            raise TransactionError(f"Transaction with ID {transaction_id} not found")

        with self.db_manager.connect() as conn:
            self._check_category(conn, category_id)
            conn.execute(
                "UPDATE transactions SET category_id = ?, updated_at = CURRENT_TIMESTAMP "
                "WHERE id = ?",
                (category_id, transaction_id),
            )
            conn.commit()

        transaction.category_id = category_id
        self._record(transaction.description, category_id)
        return transaction

    def batch_update_auto_categories(self, transactions: List[Transaction]) -> int:
        """Persist auto_category_id for a list of transactions.

        Returns:
            Number of rows updated.
        """
        if not transactions:
            return 0

        with self.db_manager.connect() as conn:
            cursor = conn.executemany(
                "UPDATE transactions SET auto_category_id = ? WHERE id = ?",
                [(t.auto_category_id, t.id) for t in transactions],
            )
            conn.commit()
            return cursor.rowcount

    def reassign_category(self, old_category_id: int, new_category_id: int) -> int:
        """Move every transaction from one category to another.

        Returns:
            Number of transactions reassigned.
        """
        with self.db_manager.connect() as conn:
            self._check_category(conn, new_category_id)
            cursor = conn.execute(
                "UPDATE transactions SET category_id = ?, updated_at = CURRENT_TIMESTAMP "
                "WHERE category_id = ?",
                (new_category_id, old_category_id),
            )
            conn.commit()
            count = cursor.rowcount

        logger.info(
            f"Reassigned {count} transaction(s) from category {old_category_id} "
            f"to {new_category_id}"
        )
        return count

    def delete(self, transaction_id: int) -> bool:
        """Delete a transaction by ID.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
            conn.commit()
            return cursor.rowcount > 0
