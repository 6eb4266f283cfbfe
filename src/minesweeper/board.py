"""
Board module for Minesweeper game.

Implements the game board with mine placement, cell revealing,
flagging and game state management.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Tuple, Iterable, Optional

import numpy as np

from .cell import Cell, CellSnapshot
from .difficulty import Difficulty, DEFAULT_DIFFICULTY
from .errors import ConfigurationError, OutOfBoundsError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.WON, GameState.LOST)


# ============================================================================
# Snapshots
# ============================================================================

@dataclass(frozen=True)
class BoardSnapshot:
    """
    Read-only copy of a board, safe to hand to the presentation layer.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Mines the difficulty asks for.
        state: Game state at the time of the snapshot.
        flags_placed: Number of flagged cells.
        cells: Grid of cell copies, indexed [row][col].
    """

    rows: int
    cols: int
    mine_count: int
    state: GameState
    flags_placed: int
    cells: Tuple[Tuple[CellSnapshot, ...], ...]

    @property
    def remaining_mines(self) -> int:
        """Mine counter shown to the player. Goes negative when over-flagged."""
        return self.mine_count - self.flags_placed

    @property
    def mine_positions(self) -> List[Position]:
        return [
            (cell.row, cell.col)
            for line in self.cells
            for cell in line
            if cell.is_mine
        ]

    def cell(self, row: int, col: int) -> CellSnapshot:
        """Get the cell copy at a position."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfBoundsError(row, col, self.rows, self.cols)
        return self.cells[row][col]

    def to_array(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for line in self.cells:
            for cell in line:
                obs[cell.row, cell.col] = cell.to_observation()
        return obs


@dataclass(frozen=True)
class BoardDelta:
    """
    Result of a reveal or flag request.

    Attributes:
        previous_state: Game state before the request.
        state: Game state after the request.
        changed: Positions whose cells were mutated, in mutation order.
        snapshot: Board copy taken after the request.
    """

    previous_state: GameState
    state: GameState
    changed: Tuple[Position, ...]
    snapshot: BoardSnapshot

    @property
    def applied(self) -> bool:
        """Whether the request changed any cell."""
        return bool(self.changed)

    @property
    def ended(self) -> bool:
        """Whether this request finished the game."""
        return self.state.is_terminal and not self.previous_state.is_terminal


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Mines are placed on the first reveal so
    that the clicked cell and its neighbors are always safe.
    """

    difficulty: Difficulty = field(default_factory=lambda: DEFAULT_DIFFICULTY)
    seed: Optional[int] = None
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _state: GameState = GameState.NOT_STARTED
    _mines_placed: bool = False
    _flags_placed: int = 0
    _hidden_safe_cells: int = 0

    def __post_init__(self) -> None:
        """Validate placement room and initialize the grid."""
        self._validate_placement_room()
        self._rng = np.random.default_rng(self.seed)
        self._init_grid()

    def _validate_placement_room(self) -> None:
        """Ensure mines fit outside the largest possible first-click zone."""
        zone = min(self.rows, 3) * min(self.cols, 3)
        placeable = self.difficulty.cells - zone
        if self.difficulty.mine_count > placeable:
            raise ConfigurationError(
                f"Too many mines for a safe first click on a "
                f"{self.rows}x{self.cols} board (max {placeable})"
            )

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row=row, col=col) for col in range(self.cols)]
            for row in range(self.rows)
        ]
        self._hidden_safe_cells = self.difficulty.safe_cells

    def _place_mines(self, row: int, col: int) -> None:
        """
        Place mines by rejection sampling, keeping the 3x3 block around
        the first click mine-free.

        Args:
            row: Row of the first click.
            col: Column of the first click.
        """
        exclusion_zone = set(self._get_neighbors(row, col))
        exclusion_zone.add((row, col))

        placed = 0
        attempts = 0
        while placed < self.difficulty.mine_count:
            attempts += 1
            mine_row = int(self._rng.integers(self.rows))
            mine_col = int(self._rng.integers(self.cols))
            if (mine_row, mine_col) in exclusion_zone:
                continue
            cell = self._grid[mine_row][mine_col]
            if cell.is_mine:
                continue
            cell.is_mine = True
            placed += 1

        logger.debug(
            "Placed %d mines around first click (%d, %d) in %d draws",
            placed, row, col, attempts,
        )
        self._finish_placement()

    def lay_mines(self, positions: Iterable[Position]) -> None:
        """
        Arm the board with a fixed mine layout instead of random placement.

        Used for replays and tests. Must be called before the first reveal.

        Args:
            positions: Exactly mine_count distinct (row, col) positions.

        Raises:
            ConfigurationError: If mines are already placed or the layout
                does not match the difficulty.
        """
        if self._mines_placed or self._state != GameState.NOT_STARTED:
            raise ConfigurationError("Mines have already been placed")

        layout = set(positions)
        if len(layout) != self.difficulty.mine_count:
            raise ConfigurationError(
                f"Expected {self.difficulty.mine_count} distinct mine "
                f"positions, got {len(layout)}"
            )
        for row, col in layout:
            if not self._is_valid_position(row, col):
                raise ConfigurationError(
                    f"Mine position ({row}, {col}) is outside the board"
                )

        for row, col in layout:
            self._grid[row][col].is_mine = True
        self._finish_placement()

    def _finish_placement(self) -> None:
        self._mines_placed = True
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for line in self._grid:
            for cell in line:
                if not cell.is_mine:
                    cell.adjacent_mines = self._count_adjacent_mines(
                        cell.row, cell.col
                    )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise OutOfBoundsError(row, col, self.rows, self.cols)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> BoardDelta:
        """
        Reveal a cell at the given position.

        On first click, places mines avoiding this cell and its
        neighbors. A safe cell flood-fills; a mine loses the game.
        Requests on finished games, revealed or flagged cells are no-ops.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            BoardDelta describing the changes.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._check_bounds(row, col)
        previous_state = self._state

        if not self._can_reveal(row, col):
            return self._delta(previous_state, ())

        if not self._mines_placed:
            self._place_mines(row, col)
        if self._state == GameState.NOT_STARTED:
            self._state = GameState.IN_PROGRESS

        if self._grid[row][col].is_mine:
            changed = self._explode(row, col)
        else:
            changed = self._flood_fill(row, col)
            self._check_win_condition()

        return self._delta(previous_state, changed)

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._state.is_terminal:
            return False
        cell = self._grid[row][col]
        return not cell.is_revealed and not cell.is_flagged

    def _flood_fill(self, row: int, col: int) -> List[Position]:
        """
        Reveal the clicked cell and expand through zero-count cells.

        Uses an explicit stack. Flagged cells, mines and already revealed
        cells are never visited; numbered cells are revealed but not
        expanded.

        Returns:
            Positions revealed, in reveal order.
        """
        revealed = []
        stack = deque([(row, col)])

        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if cell.is_mine or not cell.reveal():
                continue

            revealed.append((current_row, current_col))
            self._hidden_safe_cells -= 1

            if cell.adjacent_mines == 0:
                stack.extend(self._get_neighbors(current_row, current_col))

        logger.debug(
            "Reveal at (%d, %d) opened %d cells", row, col, len(revealed)
        )
        return revealed

    def _explode(self, row: int, col: int) -> List[Position]:
        """Lose the game and uncover every mine, clicked one first."""
        self._state = GameState.LOST
        self._grid[row][col].expose()
        changed = [(row, col)]

        for line in self._grid:
            for cell in line:
                if cell.is_mine and not cell.is_revealed:
                    cell.expose()
                    changed.append((cell.row, cell.col))

        logger.info("Mine hit at (%d, %d), game lost", row, col)
        return changed

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        if self._hidden_safe_cells == 0:
            self._state = GameState.WON
            logger.info("All safe cells revealed, game won")

    def toggle_flag(self, row: int, col: int) -> BoardDelta:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            BoardDelta describing the change (empty when ignored).

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._check_bounds(row, col)
        previous_state = self._state

        if self._state.is_terminal:
            return self._delta(previous_state, ())

        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return self._delta(previous_state, ())

        self._flags_placed += 1 if cell.is_flagged else -1
        return self._delta(previous_state, ((row, col),))

    def _delta(
        self, previous_state: GameState, changed: Iterable[Position]
    ) -> BoardDelta:
        return BoardDelta(
            previous_state=previous_state,
            state=self._state,
            changed=tuple(changed),
            snapshot=self.snapshot(),
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.difficulty.rows

    @property
    def cols(self) -> int:
        return self.difficulty.cols

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_over(self) -> bool:
        """Check if the game reached a terminal state."""
        return self._state.is_terminal

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state == GameState.LOST

    @property
    def first_click_pending(self) -> bool:
        """True until the first reveal of the game."""
        return self._state == GameState.NOT_STARTED

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def flags_placed(self) -> int:
        return self._flags_placed

    @property
    def remaining_mines(self) -> int:
        """Mine count minus flags placed; not clamped."""
        return self.difficulty.mine_count - self._flags_placed

    @property
    def hidden_safe_cells(self) -> int:
        """Number of non-mine cells still to reveal."""
        return self._hidden_safe_cells

    def get_cell(self, row: int, col: int) -> CellSnapshot:
        """Get a read-only copy of the cell at a position."""
        self._check_bounds(row, col)
        return self._grid[row][col].snapshot()

    def snapshot(self) -> BoardSnapshot:
        """Copy the board for the presentation layer."""
        return BoardSnapshot(
            rows=self.rows,
            cols=self.cols,
            mine_count=self.difficulty.mine_count,
            state=self._state,
            flags_placed=self._flags_placed,
            cells=tuple(
                tuple(cell.snapshot() for cell in line) for line in self._grid
            ),
        )

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array, see BoardSnapshot.to_array."""
        return self.snapshot().to_array()


def create_board(difficulty: Difficulty, seed: Optional[int] = None) -> Board:
    """
    Create a fresh board with all cells hidden and no mines yet placed.

    Args:
        difficulty: Board dimensions and mine count.
        seed: Optional seed for reproducible mine placement.

    Raises:
        ConfigurationError: If the mines cannot fit around a first click.
    """
    board = Board(difficulty=difficulty, seed=seed)
    logger.debug(
        "Created %dx%d board with %d mines",
        board.rows, board.cols, difficulty.mine_count,
    )
    return board
