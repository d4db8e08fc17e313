"""
Outbound Message Link Builder

Builds a click-to-chat link (wa.me style) so an admin can hand a trip's
details to the customer or the assigned driver from their own phone.
Nothing is sent by the service itself.

Example:
    >>> normalize_phone("+91 98765-43210")
    '919876543210'
    >>> normalize_phone("9876543210")      # local number, country code added
    '919876543210'
"""

import re
from typing import Dict, Optional
from urllib.parse import quote

from fleet_ledger.Core.config import settings
from fleet_ledger.Core.errors import ValidationError
from fleet_ledger.Models.trip import Trip

RECIPIENTS = ("customer", "driver")
NON_DIGIT = re.compile(r"\D")


def normalize_phone(raw: Optional[str], country_code: Optional[str] = None) -> str:
    digits = NON_DIGIT.sub("", raw or "")
    if len(digits) == 10:
        digits = (country_code or settings.DEFAULT_COUNTRY_CODE) + digits
    return digits


def _money(value) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def compose_message(trip: Trip, send_to: str) -> str:
    """Plain-text trip summary addressed to the chosen recipient."""
    if send_to == "customer":
        greeting = f"Hello {trip.customer_name or 'Customer'},"
    else:
        greeting = f"Hello {trip.driver_name or 'Driver'},"

    lines = [
        greeting,
        f"Trip: {trip.from_location or '-'} to {trip.end_location or '-'}",
    ]
    if trip.start_date:
        lines.append(f"Date: {trip.start_date:%d-%m-%Y %H:%M}")
    if trip.booking_id:
        lines.append(f"Booking ID: {trip.booking_id}")
    if trip.vehicle_type or trip.vehicle_number:
        lines.append(f"Vehicle: {trip.vehicle_type or ''} {trip.vehicle_number or ''}".rstrip())

    if send_to == "customer":
        if trip.driver_name:
            lines.append(f"Driver: {trip.driver_name} ({trip.driver_number or '-'})")
        lines.append(f"Amount: {_money(trip.trip_amount)}")
    else:
        lines.append(f"Customer: {trip.customer_name or '-'} ({trip.customer_number or '-'})")

    return "\n".join(lines)


def build_link(trip: Trip, send_to: str) -> Dict[str, str]:
    """
    Build the chat link for a trip.

    Args:
        trip: Trip to summarize
        send_to: 'customer' (uses customer_number) or 'driver' (uses driver_number)

    Raises:
        ValidationError: Unknown recipient or recipient has no phone number
    """
    if send_to not in RECIPIENTS:
        raise ValidationError.for_field("sendTo", "sendTo must be 'customer' or 'driver'")

    raw_phone = trip.customer_number if send_to == "customer" else trip.driver_number
    phone = normalize_phone(raw_phone)
    if not phone:
        raise ValidationError.for_field("sendTo", f"Trip has no {send_to} phone number")

    message = compose_message(trip, send_to)
    link = f"{settings.WHATSAPP_BASE_URL.rstrip('/')}/{phone}?text={quote(message)}"

    return {"send_to": send_to, "phone": phone, "message": message, "link": link}
