"""Credit ledger: the only writer of a store's credit counters.

Paid work follows a reserve/settle saga. Credits are taken from
credits_remaining before any model call is made, and once the outcome is
known the used part is added to credits_used and the rest is handed back.
If the work aborts, the whole reservation is refunded.

Every operation is a single conditional UPDATE on the store row, committed
immediately. Concurrent reservations for one store are serialized by the
database row lock; unrelated stores never contend.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from alttext.models.store import Store
from alttext.services.errors import LedgerError

logger = logging.getLogger(__name__)


class CreditLedger:
    """Atomic credit operations against the stores table."""

    def __init__(self, db: Session):
        self.db = db

    def _execute(self, store_id: int, values: dict, *criteria) -> int:
        try:
            updated = (
                self.db.query(Store)
                .filter(Store.id == store_id, *criteria)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise LedgerError(f"Credit update failed for store {store_id}: {e}") from e
        return updated

    def balance(self, store_id: int) -> int:
        """Current credits_remaining for a store (0 if it does not exist)."""
        remaining = self.db.query(Store.credits_remaining).filter(Store.id == store_id).scalar()
        return remaining or 0

    def reserve(self, store_id: int, amount: int) -> bool:
        """Take `amount` credits if, and only if, the store has that many.

        Returns:
            True if the credits were reserved, False on insufficient balance
        """
        if amount <= 0:
            raise ValueError("amount must be positive")

        updated = self._execute(
            store_id,
            {Store.credits_remaining: Store.credits_remaining - amount},
            Store.credits_remaining >= amount,
        )
        if updated:
            logger.info(f"Reserved {amount} credits for store {store_id}")
        else:
            logger.info(f"Reservation of {amount} credits refused for store {store_id}")
        return bool(updated)

    def commit(self, store_id: int, used: int) -> None:
        """Record `used` reserved credits as spent."""
        if used <= 0:
            return
        self._execute(store_id, {Store.credits_used: Store.credits_used + used})

    def refund(self, store_id: int, amount: int) -> None:
        """Return `amount` reserved-but-unspent credits to the balance."""
        if amount <= 0:
            return
        self._execute(store_id, {Store.credits_remaining: Store.credits_remaining + amount})
        logger.info(f"Refunded {amount} credits to store {store_id}")

    def settle(self, store_id: int, reserved: int, used: int) -> None:
        """Commit `used` credits and refund the rest of a reservation in one update.

        Pending changes on the session (record upserts, the usage record) are
        committed in the same transaction.
        """
        if not 0 <= used <= reserved:
            raise ValueError(f"used ({used}) must be between 0 and reserved ({reserved})")

        unused = reserved - used
        self._execute(
            store_id,
            {
                Store.credits_used: Store.credits_used + used,
                Store.credits_remaining: Store.credits_remaining + unused,
            },
        )
        logger.info(
            f"Settled reservation of {reserved} for store {store_id}: "
            f"{used} used, {unused} refunded"
        )
