"""Ways to play the draw engine: a terminal game and a websocket practice host."""

from .console import ConsoleGame

__all__ = ["ConsoleGame"]
