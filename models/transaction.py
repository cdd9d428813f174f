from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

MAX_DESCRIPTION_LENGTH = 100


@dataclass
class Transaction:
    id: Optional[int]
    transaction_date: date
    description: str
    amount: Decimal  # positive = income, negative = expense
    type: str  # 'income' or 'expense', derived from the amount sign
    category_id: Optional[int] = None
    auto_category_id: Optional[int] = None

    @staticmethod
    def type_for_amount(amount: Decimal) -> str:
        """Derive the transaction type from the sign of the amount.

        Raises:
            ValueError: If amount is zero.
        """
        if amount > 0:
            return "income"
        if amount < 0:
            return "expense"
        raise ValueError("Transaction amount cannot be zero")
