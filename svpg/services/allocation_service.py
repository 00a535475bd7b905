"""
Allocation Service – maps the static floor/room/bed layout onto booking records.

Guarantees at most one booking per (floor, room, bed). The availability checks
below give friendly error messages; the unique ``unique_bed`` index on the
bookings collection is what actually closes the window between the check and
the write when two requests race for the same bed.
"""
import logging
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from svpg.config.database import Collections
from svpg.config.topology import Topology
from svpg.database.db_operations import DBOperations, db_ops
from svpg.exceptions import BedOccupiedError, BookingNotFoundError, InvalidBedError
from svpg.models.booking import BookedBed, BookingCreate, RoomStatus

logger = logging.getLogger(__name__)


class AllocationEngine:

    def __init__(self, topology: Topology, store: DBOperations = db_ops):
        self.topology = topology
        self.store = store

    # ─── Inventory ────────────────────────────────────────────────────────────

    def capacity(self, floor: int, room: int) -> int:
        return self.topology.capacity(floor, room)

    def _check_bed(self, floor: int, room: int, bed: int) -> int:
        total = self.capacity(floor, room)
        if not 1 <= bed <= total:
            raise InvalidBedError()
        return total

    async def occupant(
        self, floor: int, room: int, bed: int, exclude_id: Optional[ObjectId] = None
    ) -> Optional[Dict]:
        """Booking holding the bed, ignoring ``exclude_id`` (the booking being moved)"""
        query = {"floor": floor, "room": room, "bed": bed}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        return await self.store.get_one(Collections.BOOKINGS, query)

    async def room_status(self, floor: int, room: int) -> RoomStatus:
        """Partition beds 1..capacity into booked (with occupant) and available"""
        total = self.capacity(floor, room)
        records = await self.store.get_all(
            Collections.BOOKINGS, {"floor": floor, "room": room}, sort=[("bed", 1)]
        )

        booked = []
        for record in records:
            if not 1 <= record["bed"] <= total:
                logger.warning(
                    "Booking %s sits on bed %s outside room %s/%s capacity %s",
                    record["_id"], record["bed"], floor, room, total,
                )
                continue
            booked.append(BookedBed(bed=record["bed"], name=record["name"], booking_id=str(record["_id"])))

        taken = {b.bed for b in booked}
        available = [bed for bed in range(1, total + 1) if bed not in taken]
        return RoomStatus(floor=floor, room=room, total_beds=total, booked=booked, available=available)

    async def floor_status(self, floor: int) -> List[RoomStatus]:
        return [await self.room_status(floor, room) for room in self.topology.rooms(floor)]

    # ─── Bookings ─────────────────────────────────────────────────────────────

    async def list_bookings(self) -> List[Dict]:
        return await self.store.get_all(
            Collections.BOOKINGS, sort=[("floor", 1), ("room", 1), ("bed", 1)]
        )

    async def get_booking(self, booking_id: str) -> Dict:
        booking = await self.store.get_by_id(Collections.BOOKINGS, booking_id)
        if not booking:
            raise BookingNotFoundError()
        return booking

    async def create_booking(self, booking: BookingCreate) -> Dict:
        """Check the guest into a free bed"""
        floor, room, bed = booking.floor, booking.room, booking.bed
        self._check_bed(floor, room, bed)

        existing = await self.occupant(floor, room, bed)
        if existing:
            raise BedOccupiedError(existing.get("name"))

        document = booking.model_dump(mode="json")
        try:
            created = await self.store.create(Collections.BOOKINGS, document)
        except DuplicateKeyError:
            winner = await self.occupant(floor, room, bed)
            raise BedOccupiedError(winner.get("name") if winner else None) from None

        logger.info("Booked %s into floor %s room %s bed %s", created["name"], floor, room, bed)
        return created

    async def shift_booking(self, booking_id: str, to_floor: int, to_room: int, to_bed: int) -> Dict:
        """Move a booking to another bed. Moving onto its own bed is a no-op."""
        self._check_bed(to_floor, to_room, to_bed)

        booking = await self.get_booking(booking_id)
        existing = await self.occupant(to_floor, to_room, to_bed, exclude_id=booking["_id"])
        if existing:
            raise BedOccupiedError(existing.get("name"))

        try:
            updated = await self.store.update(
                Collections.BOOKINGS,
                booking["_id"],
                {"floor": to_floor, "room": to_room, "bed": to_bed},
            )
        except DuplicateKeyError:
            winner = await self.occupant(to_floor, to_room, to_bed, exclude_id=booking["_id"])
            raise BedOccupiedError(winner.get("name") if winner else None) from None

        if updated is None:
            # Deleted between the lookup and the update
            raise BookingNotFoundError()

        logger.info(
            "Shifted booking %s from %s/%s/%s to %s/%s/%s",
            booking["_id"], booking["floor"], booking["room"], booking["bed"],
            to_floor, to_room, to_bed,
        )
        return updated

    async def delete_booking(self, booking_id: str) -> Dict:
        """Check the guest out, releasing the bed. Payments keep their reference."""
        booking = await self.get_booking(booking_id)
        if not await self.store.delete(Collections.BOOKINGS, booking["_id"]):
            raise BookingNotFoundError()
        logger.info(
            "Released floor %s room %s bed %s (booking %s)",
            booking["floor"], booking["room"], booking["bed"], booking["_id"],
        )
        return booking
