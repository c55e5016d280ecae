import logging

logger = logging.getLogger(__name__)


def int_to_id(num: int) -> str:
    """Convert a positive number to a spreadsheet-style name.

    Counts a to z, then aa to az, ba to bz, and so on.

    Example:
        >>> [int_to_id(n) for n in (1, 26, 27, 52, 703)]
        ['a', 'z', 'aa', 'az', 'aaa']
    """
    if num < 1:
        raise ValueError(f"Number must be positive: {num}")
    name = ""
    while num > 0:
        num -= 1
        name = chr(ord("a") + num % 26) + name
        num //= 26
    return name


class IDCounter:
    """A strictly increasing counter that hands out short names."""

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError(f"Counter must start at a positive number: {start}")
        self.value = start

    def next_id(self) -> str:
        """Get the name for the current value and advance the counter."""
        name = int_to_id(self.value)
        self.value += 1
        return name
