"""Furniture volume arithmetic.

Dimensions are stored in centimetres; volumes in cubic metres.
"""

CM3_PER_M3 = 1_000_000


def furniture_volume(length: float, width: float, height: float, quantity: int = 1) -> float:
    """
    Volume in m³ of `quantity` identical pieces.

        furniture_volume(200, 80, 85, 1) == 1.36
    """
    return (length * width * height * quantity) / CM3_PER_M3


def room_volume(furniture_volumes) -> float:
    """Derived room volume: sum of its furniture volumes, 0.0 when the room is empty."""
    return float(sum(furniture_volumes, 0.0))
