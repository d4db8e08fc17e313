"""
Trip Statistics - Aggregation Engine
====================================

Pure computation over records that were already scoped to the caller. No
database access and no authorization happen here.

    per-trip expense = fuel + tolls + parking_charges + driver_beta
    total_expenses   = sum(per-trip expense) + maintenance + ads
    total_profit     = total_trip_amount - total_expenses

Fuel amounts are free text in practice. parse_fuel_amount() applies the
legacy heuristic exactly: a value that reads as a number is used as is;
otherwise every run of digits is taken as an integer and the runs are
summed. "2 liters @100" therefore counts as 102 and "12.5" inside text
counts as 17. Downstream reports depend on these figures, so the heuristic
must not be changed here without a data migration plan.
"""

import math
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable

# ASCII digits only: Devanagari or full-width digits in notes count as text
DIGIT_RUN = re.compile(r"[0-9]+")


@dataclass
class TripStats:
    total_trips: int = 0
    total_trip_amount: float = 0
    total_expenses: float = 0
    total_maintenance: float = 0
    total_ads: float = 0
    total_profit: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def to_amount(value: Any) -> float:
    """Numeric value of a money field; 0 when absent or not a number."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0
    return amount if math.isfinite(amount) else 0


def parse_fuel_amount(value: Any) -> float:
    """
    Fuel cost from a number or an operator note.

    Examples:
        >>> parse_fuel_amount("500")
        500.0
        >>> parse_fuel_amount("2 liters @100 plus 50 toll note")
        152
        >>> parse_fuel_amount(None)
        0
    """
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return to_amount(value)

    text = str(value)
    amount = None
    if "_" not in text and text.isascii():
        try:
            amount = float(text)
        except ValueError:
            pass

    if amount is not None and math.isfinite(amount):
        return amount

    return sum(int(run) for run in DIGIT_RUN.findall(text))


def trip_expense(trip: Any) -> float:
    return (
        parse_fuel_amount(trip.fuel_amount)
        + to_amount(trip.tolls)
        + to_amount(trip.parking_charges)
        + to_amount(trip.driver_beta)
    )


def compute_stats(
    trips: Iterable[Any],
    maintenance: Iterable[Any] = (),
    ads: Iterable[Any] = ()
) -> TripStats:
    """
    Summarize visible trips plus external expense records.

    Args:
        trips: Non-deleted trips in the caller's scope
        maintenance: Maintenance records in the caller's scope (may be empty)
        ads: Advertising records (may be empty)

    Returns:
        TripStats
    """
    stats = TripStats()
    trip_expenses = 0

    for trip in trips:
        stats.total_trips += 1
        stats.total_trip_amount += to_amount(trip.trip_amount)
        trip_expenses += trip_expense(trip)

    stats.total_maintenance = sum(to_amount(record.cost) for record in maintenance)
    stats.total_ads = sum(to_amount(record.amount) for record in ads)
    stats.total_expenses = trip_expenses + stats.total_maintenance + stats.total_ads

    # Derived once from the final totals
    stats.total_profit = stats.total_trip_amount - stats.total_expenses

    return stats
