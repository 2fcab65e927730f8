"""Domain models for delivery settings."""

from dataclasses import dataclass, replace

DEFAULT_DAILY_QUANTITY = 1
DEFAULT_PRICE_PER_LITER = 50


@dataclass(frozen=True)
class DeliverySettings:
    """Daily quantity in liters and price per liter in minor currency units."""

    daily_quantity_liters: int = DEFAULT_DAILY_QUANTITY
    price_per_liter: int = DEFAULT_PRICE_PER_LITER

    def __post_init__(self) -> None:
        if self.daily_quantity_liters < 0:
            raise ValueError("daily_quantity_liters must be non-negative")
        if self.price_per_liter < 0:
            raise ValueError("price_per_liter must be non-negative")

    def with_quantity(self, value: int) -> "DeliverySettings":
        return replace(self, daily_quantity_liters=value)

    def with_price(self, value: int) -> "DeliverySettings":
        return replace(self, price_per_liter=value)


def parse_non_negative_int(raw: str | None) -> int | None:
    """Parse user input as a non-negative integer, or return None."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned.isascii() or not cleaned.isdigit():
        return None
    return int(cleaned)
