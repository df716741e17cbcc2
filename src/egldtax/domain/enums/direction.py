from enum import Enum


class Direction(str, Enum):
    """Which way an asset moved relative to the wallet."""

    IN = "IN"
    OUT = "OUT"
