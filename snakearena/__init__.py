"""Snake game engine and a multiplayer snake server over WebSockets."""

__version__ = "0.1.0"

__all__ = ["game", "server", "main"]