"""blockfall: a falling-block puzzle engine with pygame and gymnasium front ends."""

from .game import Action, Board, FallingBlockGame, GameConfig, GamePiece

__all__ = ["Action", "Board", "FallingBlockGame", "GameConfig", "GamePiece"]
