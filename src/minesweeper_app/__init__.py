"""
Console application for Minesweeper.

Wires the game session to the leaderboard and renders boards as text.
"""
from .config import AppConfig
from .console import ConsoleGame
from .render import render_board, render_status

__all__ = [
    "AppConfig",
    "ConsoleGame",
    "render_board",
    "render_status",
]
