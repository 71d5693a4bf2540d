"""Wallet: balance plus the fixed set of denominations."""
import logging
from typing import Sequence

from reelspin.balance_store import BalanceStore
from reelspin.config import settings
from reelspin.errors import InsufficientFunds
from reelspin.validators import validate_amount


logger = logging.getLogger(__name__)


class Wallet:
    """
    Player balance with debit/credit.

    Every mutation is written to the balance store before it is committed in
    memory, so a store failure leaves the wallet unchanged.
    """

    def __init__(
        self,
        store: BalanceStore,
        balance: int,
        available_amounts: Sequence[int] | None = None,
    ):
        if balance < 0:
            raise ValueError(f"balance must be non-negative, got {balance}")
        amounts = tuple(available_amounts or settings.available_amounts)
        if not amounts or any(a <= 0 for a in amounts):
            raise ValueError(f"denominations must be positive, got {list(amounts)}")
        self._store = store
        self._balance = balance
        self._available_amounts = amounts

    @classmethod
    def load(
        cls,
        store: BalanceStore,
        available_amounts: Sequence[int] | None = None,
        default_balance: int | None = None,
    ) -> "Wallet":
        """Create a wallet from the stored balance (default if absent)."""
        balance = store.load_balance()
        if balance is None:
            balance = settings.default_balance if default_balance is None else default_balance
        return cls(store, balance, available_amounts)

    def get_balance(self) -> int:
        return self._balance

    def available_amounts(self) -> list[int]:
        """Denominations as a fresh list; the wallet's own copy is immutable."""
        return list(self._available_amounts)

    def debit(self, amount: int) -> int:
        """
        Remove amount from the balance.

        Raises INSUFFICIENT_FUNDS (balance unchanged) if amount > balance.
        Returns the new balance.
        """
        validate_amount(amount)
        if amount > self._balance:
            raise InsufficientFunds(amount, self._balance)
        return self._commit(self._balance - amount, "debit", amount)

    def credit(self, amount: int) -> int:
        """Add amount to the balance. Returns the new balance."""
        validate_amount(amount)
        return self._commit(self._balance + amount, "credit", amount)

    def _commit(self, new_balance: int, operation: str, amount: int) -> int:
        self._store.save_balance(new_balance)
        logger.info(
            "Wallet %s %d: %d -> %d", operation, amount, self._balance, new_balance
        )
        self._balance = new_balance
        return new_balance
