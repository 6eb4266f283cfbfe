"""
Text rendering of board snapshots.
"""
from minesweeper import BoardSnapshot, GameState
from minesweeper.cell import HIDDEN_CODE, FLAGGED_CODE, MINE_CODE

STATUS_TEXT = {
    GameState.NOT_STARTED: "Reveal a cell to start",
    GameState.IN_PROGRESS: "Playing",
    GameState.WON: "You won!",
    GameState.LOST: "Game over",
}


def _symbol(value: int) -> str:
    if value == HIDDEN_CODE:
        return "."
    if value == FLAGGED_CODE:
        return "F"
    if value == MINE_CODE:
        return "*"
    if value == 0:
        return " "
    return str(value)


def render_board(snapshot: BoardSnapshot) -> str:
    """
    Render board as ASCII string with row and column headers.

    Symbols: "." hidden, "F" flag, "*" mine, blank for 0, digits
    otherwise.
    """
    obs = snapshot.to_array()
    width = len(str(max(snapshot.rows, snapshot.cols) - 1))

    header = " " * (width + 1) + " ".join(
        str(col).rjust(width) for col in range(snapshot.cols)
    )
    lines = [header]
    for row in range(snapshot.rows):
        cells = " ".join(
            _symbol(int(obs[row, col])).rjust(width)
            for col in range(snapshot.cols)
        )
        lines.append(f"{str(row).rjust(width)} {cells}")

    return "\n".join(lines)


def render_status(snapshot: BoardSnapshot, elapsed_seconds: int) -> str:
    """One-line mine counter, timer and status."""
    return (
        f"Mines: {snapshot.remaining_mines} | "
        f"Time: {elapsed_seconds}s | "
        f"{STATUS_TEXT[snapshot.state]}"
    )
