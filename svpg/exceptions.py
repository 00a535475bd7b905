"""
Domain errors raised by the services and translated to HTTP responses by the routes
"""
from typing import Optional


class SVPGError(Exception):
    """Base class for every expected, per-request failure"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ─── Allocation ───────────────────────────────────────────────────────────────

class AllocationError(SVPGError):
    pass


class TopologyError(AllocationError):
    """Floor or room position outside the configured layout"""


class InvalidBedError(AllocationError):
    def __init__(self, message: str = "Invalid bed for this room sharing type"):
        super().__init__(message)


class BedOccupiedError(AllocationError):
    def __init__(self, occupant: Optional[str]):
        self.occupant = occupant or "Unknown"
        super().__init__(f"Bed already booked by: {self.occupant}")


class BookingNotFoundError(AllocationError):
    def __init__(self, message: str = "Booking not found"):
        super().__init__(message)


# ─── Payments ─────────────────────────────────────────────────────────────────

class PaymentError(SVPGError):
    pass


class InvalidAdminCodeError(PaymentError):
    def __init__(self):
        super().__init__("Invalid admin code")


class PaymentNotFoundError(PaymentError):
    def __init__(self):
        super().__init__("Payment not found")


class UserNotFoundError(SVPGError):
    def __init__(self):
        super().__init__("User not found")
