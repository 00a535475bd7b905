"""
Booking model and schemas
A booking is one guest's current placement on a floor/room/bed
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


class BookingBase(BaseModel):
    # Guest details
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    alt_phone: Optional[str] = Field(None, alias="altPhone")
    email: Optional[str] = None
    aadhar_number: Optional[str] = Field(None, alias="aadharNumber")
    join_date: date = Field(..., alias="joinDate")

    # Placement (bed range is checked against the room layout by the allocation engine)
    floor: int
    room: int
    bed: int

    user_id: Optional[str] = Field(None, alias="userId")
    amount_paid: float = Field(0, ge=0, alias="amountPaid")

    # Upload paths relative to the server root (e.g. "uploads/<file>")
    photo: Optional[str] = None
    aadhar_file: Optional[str] = Field(None, alias="aadharFile")

    class Config:
        populate_by_name = True


class BookingCreate(BookingBase):
    pass


class BookingShift(BaseModel):
    booking_id: str = Field(..., alias="bookingId")
    to_floor: int = Field(..., alias="toFloor")
    to_room: int = Field(..., alias="toRoom")
    to_bed: int = Field(..., alias="toBed")

    class Config:
        populate_by_name = True


class BookingResponse(BookingBase):
    id: str = Field(alias="_id")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class BookedBed(BaseModel):
    bed: int
    name: str
    booking_id: str = Field(alias="bookingId")

    class Config:
        populate_by_name = True


class RoomStatus(BaseModel):
    floor: int
    room: int
    total_beds: int = Field(alias="totalBeds")
    booked: List[BookedBed] = []
    available: List[int] = []

    class Config:
        populate_by_name = True
