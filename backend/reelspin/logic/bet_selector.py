"""Bet denomination and reel geometry selection."""
from typing import Callable, Sequence

from reelspin.config import settings
from reelspin.errors import SessionBusy
from reelspin.validators import validate_denomination, validate_geometry


class BetSelector:
    """
    Current bet (index into the denominations) and columns x rows.

    Every mutation is refused with SESSION_BUSY while is_busy() is true, so
    neither the charged bet nor the reel array can change mid-spin.
    """

    def __init__(
        self,
        available_amounts: Sequence[int],
        column_options: Sequence[int] | None = None,
        row_options: Sequence[int] | None = None,
        columns: int | None = None,
        rows: int | None = None,
        initial_bet: int | None = None,
        is_busy: Callable[[], bool] | None = None,
    ):
        self._amounts = tuple(available_amounts)
        self._column_options = tuple(column_options or settings.column_options)
        self._row_options = tuple(row_options or settings.row_options)
        self._columns = validate_geometry(
            "columns",
            settings.default_columns if columns is None else columns,
            self._column_options,
        )
        self._rows = validate_geometry(
            "rows", settings.default_rows if rows is None else rows, self._row_options
        )
        self._bet_index = (
            0 if initial_bet is None else validate_denomination(initial_bet, self._amounts)
        )
        self._is_busy = is_busy or (lambda: False)

    @property
    def bet_index(self) -> int:
        return self._bet_index

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def column_options(self) -> list[int]:
        return list(self._column_options)

    @property
    def row_options(self) -> list[int]:
        return list(self._row_options)

    def current_bet(self) -> int:
        return self._amounts[self._bet_index]

    def increase_bet(self) -> int:
        """Step to the next denomination; no-op at the largest."""
        self._ensure_idle("change the bet")
        self._bet_index = min(self._bet_index + 1, len(self._amounts) - 1)
        return self.current_bet()

    def decrease_bet(self) -> int:
        """Step to the previous denomination; no-op at the smallest."""
        self._ensure_idle("change the bet")
        self._bet_index = max(self._bet_index - 1, 0)
        return self.current_bet()

    def set_bet(self, amount: int) -> int:
        self._ensure_idle("change the bet")
        self._bet_index = validate_denomination(amount, self._amounts)
        return self.current_bet()

    def set_columns(self, n: int) -> int:
        self._ensure_idle("change columns")
        self._columns = validate_geometry("columns", n, self._column_options)
        return self._columns

    def set_rows(self, n: int) -> int:
        self._ensure_idle("change rows")
        self._rows = validate_geometry("rows", n, self._row_options)
        return self._rows

    def _ensure_idle(self, action: str) -> None:
        if self._is_busy():
            raise SessionBusy(action)
