"""Esports championship management: team registration, match scheduling, spectator seating and statistics."""

__version__ = "1.0.0"
__all__ = ["scheduler", "spectators", "statistics", "teams"]