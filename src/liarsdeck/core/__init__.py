"""Core game logic and data structures."""

from . import cards, chamber, fsm, hand, history, player, schemas

__all__ = ["cards", "chamber", "fsm", "hand", "history", "player", "schemas"]
