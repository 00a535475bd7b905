"""
Payment Service – manual (cash / UPI) payments recorded by staff.

Payments keep a denormalized snapshot of room/bed taken when they are recorded;
later shifts of the booking do not rewrite it. Linked bookings and users are
fetched explicitly and may be missing (a booking deleted after payment leaves a
dangling ``booking_id``).
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from svpg.config.database import Collections
from svpg.database.db_operations import db_ops, to_object_id
from svpg.exceptions import (
    BookingNotFoundError,
    InvalidAdminCodeError,
    PaymentNotFoundError,
    UserNotFoundError,
)
from svpg.models.payment import ManualPaymentCreate
from svpg.utils.helpers import format_room_number

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", -1), ("_id", -1)]
UNKNOWN_USER_KEY = "unknown"


@dataclass
class PaymentLinks:
    booking: Optional[Dict] = None
    user: Optional[Dict] = None


def admin_code_matches(code: Optional[str], expected: str) -> bool:
    """Case-insensitive comparison against the shared payment code"""
    if not code or not code.strip():
        return False
    return code.strip().upper() == expected.strip().upper()


async def record_manual_payment(data: ManualPaymentCreate, admin_code: str) -> Dict:
    if not admin_code_matches(data.code, admin_code):
        raise InvalidAdminCodeError()

    user = None
    if data.user_id:
        user = await db_ops.get_by_id(Collections.USERS, data.user_id)
        if not user:
            raise UserNotFoundError()

    room_number = data.room_number or None
    bed_number = data.bed_number or None

    booking = None
    if data.booking_id:
        booking = await db_ops.get_by_id(Collections.BOOKINGS, data.booking_id)
        if not booking:
            raise BookingNotFoundError()
        # The booking is authoritative over whatever the caller typed
        room_number = format_room_number(booking["floor"], booking["room"])
        bed_number = booking["bed"]

    payment = {
        "user_id": str(user["_id"]) if user else None,
        "booking_id": str(booking["_id"]) if booking else None,
        "amount": data.amount,
        "code": data.code.strip(),
        "name": data.name or (user and (user.get("name") or user.get("username"))) or "Unknown",
        "phone": data.phone or (user and user.get("phone")) or "N/A",
        "room_number": room_number,
        "bed_number": bed_number,
    }
    created = await db_ops.create(Collections.PAYMENTS, payment)
    logger.info("Recorded payment %s of %s for %s", created["_id"], data.amount, created["name"])
    return created


# ─── Linked records ───────────────────────────────────────────────────────────

async def load_links(payment: Dict) -> PaymentLinks:
    booking = None
    if payment.get("booking_id"):
        booking = await db_ops.get_by_id(Collections.BOOKINGS, payment["booking_id"])
    user = None
    if payment.get("user_id"):
        user = await db_ops.get_by_id(Collections.USERS, payment["user_id"])
    return PaymentLinks(booking=booking, user=user)


async def _fetch_by_ids(collection_name: str, ids: Iterable[Optional[str]]) -> Dict[str, Dict]:
    oids = {to_object_id(i) for i in ids if i}
    oids.discard(None)
    if not oids:
        return {}
    docs = await db_ops.get_all(collection_name, {"_id": {"$in": list(oids)}})
    return {str(doc["_id"]): doc for doc in docs}


async def load_links_many(payments: List[Dict]) -> List[PaymentLinks]:
    """Resolve links for a batch of payments with one query per collection"""
    bookings = await _fetch_by_ids(Collections.BOOKINGS, (p.get("booking_id") for p in payments))
    users = await _fetch_by_ids(Collections.USERS, (p.get("user_id") for p in payments))
    return [
        PaymentLinks(
            booking=bookings.get(str(p.get("booking_id"))),
            user=users.get(str(p.get("user_id"))),
        )
        for p in payments
    ]


def attach_links(payment: Dict, links: PaymentLinks) -> Dict:
    """Embed linked records and back-fill an empty room/bed snapshot from the booking"""
    if (not payment.get("room_number") or not payment.get("bed_number")) and links.booking:
        payment["room_number"] = format_room_number(links.booking["floor"], links.booking["room"])
        payment["bed_number"] = links.booking["bed"]
    payment["booking"] = links.booking
    payment["user"] = links.user
    return payment


# ─── Queries ──────────────────────────────────────────────────────────────────

async def get_payment(payment_id: str) -> Tuple[Dict, PaymentLinks]:
    payment = await db_ops.get_by_id(Collections.PAYMENTS, payment_id)
    if not payment:
        raise PaymentNotFoundError()
    return payment, await load_links(payment)


async def payment_history(user_id: str) -> List[Dict]:
    """Payments of one user, newest first"""
    payments = await db_ops.get_all(Collections.PAYMENTS, {"user_id": user_id}, sort=NEWEST_FIRST)
    links = await load_links_many(payments)
    return [attach_links(p, l) for p, l in zip(payments, links)]


async def grouped_payments() -> List[Dict]:
    """
    All payments grouped by user, in order of each user's most recent payment.
    Payments without a resolvable user share the "unknown" group.
    """
    payments = await db_ops.get_all(Collections.PAYMENTS, sort=NEWEST_FIRST)
    links = await load_links_many(payments)

    grouped: Dict[str, Dict] = {}
    for payment, link in zip(payments, links):
        user = link.user
        key = str(user["_id"]) if user else UNKNOWN_USER_KEY
        if key not in grouped:
            grouped[key] = {
                "user_id": str(user["_id"]) if user else None,
                "user_name": (user and user.get("name")) or payment.get("name") or "Unknown",
                "phone": (user and user.get("phone")) or payment.get("phone") or "N/A",
                "payments": [],
                "total_amount": 0,
            }
        grouped[key]["payments"].append(attach_links(payment, link))
        grouped[key]["total_amount"] += float(payment.get("amount") or 0)

    return list(grouped.values())


async def delete_payment(payment_id: str) -> None:
    if not await db_ops.delete(Collections.PAYMENTS, payment_id):
        raise PaymentNotFoundError()
    logger.info("Deleted payment %s", payment_id)
