"""Reel area geometry derived from machine size and columns x rows."""
from pydantic import BaseModel


# Share of the machine surface taken by the reel area
REELS_WIDTH_RATIO = 0.95
REELS_HEIGHT_RATIO = 0.8
SYMBOL_WIDTH_RATIO = 0.9


class Layout(BaseModel):
    """Computed reel geometry in surface units."""
    columns: int
    rows: int
    reels_width: float
    reels_height: float
    reel_width: float
    symbol_height: float
    symbol_size: float


def compute_layout(
    columns: int,
    rows: int,
    machine_width: float = 800.0,
    machine_height: float = 600.0,
    border_width: float = 2.0,
    symbol_height: float | None = None,
) -> Layout:
    """
    Compute reel and symbol sizes.

    Borders sit between and around reels/rows, so a machine with n columns
    has n + 1 vertical borders. symbol_height, when given, overrides the
    computed row height.
    """
    if columns <= 0 or rows <= 0:
        raise ValueError(f"columns and rows must be positive, got {columns}x{rows}")
    reels_width = machine_width * REELS_WIDTH_RATIO
    reels_height = machine_height * REELS_HEIGHT_RATIO
    reel_width = (reels_width - (columns + 1) * border_width) / columns
    row_height = (reels_height - (rows + 1) * border_width) / rows
    if symbol_height is None:
        symbol_height = row_height
    if reel_width <= 0 or symbol_height <= 0:
        raise ValueError(
            f"machine {machine_width}x{machine_height} too small for {columns}x{rows}"
        )
    return Layout(
        columns=columns,
        rows=rows,
        reels_width=reels_width,
        reels_height=reels_height,
        reel_width=reel_width,
        symbol_height=symbol_height,
        symbol_size=min(reel_width * SYMBOL_WIDTH_RATIO, symbol_height),
    )
