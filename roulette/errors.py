"""Exceptions raised by the roulette core."""


class InvalidInput(ValueError):
    """Raised when an option list or trial request cannot be used for a spin."""
