from .terminal import tty_available

__all__ = ["tty_available"]
