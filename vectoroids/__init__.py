"""Vectoroids: an Asteroids-style arcade game built on pygame."""

from .game import Game

__all__ = ["Game"]

__version__ = "0.1.0"
