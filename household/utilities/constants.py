from typing import Final

ISO_DATE_FORMAT: Final[str] = "%Y-%m-%d"

PRIORITIES: Final[tuple[str, ...]] = ("low", "med", "high")
DEFAULT_PRIORITY: Final[str] = "med"
MIN_CURRENCY_LENGTH: Final[int] = 3

RECURRENCE_FREQUENCIES: Final[tuple[str, ...]] = ("DAILY", "WEEKLY", "MONTHLY")

MEAL_SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")
DAY_LABELS: Final[tuple[str, ...]] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

QUANTITY_SEPARATOR: Final[str] = ", "
