"""
Manual payment models (cash / UPI entered by staff)
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from svpg.models.booking import BookingResponse
from svpg.models.user import UserResponse


class ManualPaymentCreate(BaseModel):
    """Body of POST /payments/manual"""
    user_id: Optional[str] = Field(None, alias="userId")
    booking_id: Optional[str] = Field(None, alias="bookingId")
    amount: float = Field(..., gt=0)
    # Checked by the service so a missing code reads as "Invalid admin code"
    code: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    room_number: Optional[str] = Field(None, alias="roomNumber")
    bed_number: Optional[int] = Field(None, alias="bedNumber")

    @field_validator('room_number', mode="before")
    @classmethod
    def coerce_room_number(cls, v):
        # Forms send "101", older clients send 101
        if v is None:
            return v
        return str(v)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "bookingId": "665f1c2e9b1e8a0012345678",
                "amount": 6500,
                "code": "XXXXXXXXXXXXXX",
            }
        }


class PaymentResponse(BaseModel):
    """Stored payment snapshot, optionally with its linked records resolved"""
    id: str = Field(alias="_id")
    user_id: Optional[str] = Field(None, alias="userId")
    booking_id: Optional[str] = Field(None, alias="bookingId")
    name: str
    phone: str
    room_number: Optional[str] = Field(None, alias="roomNumber")
    bed_number: Optional[int] = Field(None, alias="bedNumber")
    amount: float
    code: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    booking: Optional[BookingResponse] = None
    user: Optional[UserResponse] = None

    @field_validator('room_number', mode="before")
    @classmethod
    def coerce_room_number(cls, v):
        return v if v is None else str(v)

    class Config:
        populate_by_name = True


class PaymentGroup(BaseModel):
    user_id: Optional[str] = Field(None, alias="userId")
    user_name: str = Field(alias="userName")
    phone: str
    payments: List[PaymentResponse] = []
    total_amount: float = Field(0, alias="totalAmount")

    class Config:
        populate_by_name = True
