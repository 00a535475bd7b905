from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse
from datetime import date
from typing import Dict, Optional
from pydantic import ValidationError

from svpg.exceptions import (
    AllocationError,
    BedOccupiedError,
    BookingNotFoundError,
    InvalidBedError,
    TopologyError,
)
from svpg.models.booking import BookingCreate, BookingResponse, BookingShift
from svpg.services.allocation_service import AllocationEngine
from svpg.utils.helpers import serialize_doc
from svpg.utils.uploads import discard_uploads, save_upload

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_allocation_engine(request: Request) -> AllocationEngine:
    return AllocationEngine(request.app.state.topology)


def booking_out(doc: Dict) -> Dict:
    return BookingResponse.model_validate(serialize_doc(doc)).model_dump(by_alias=True, mode="json")


@router.get("")
async def get_bookings(engine: AllocationEngine = Depends(get_allocation_engine)):
    """List all bookings"""
    bookings = await engine.list_bookings()
    return [booking_out(b) for b in bookings]


@router.get("/room-status")
async def room_status(
    floor: int = Query(...),
    room: int = Query(...),
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    """Capacity plus booked and available beds of one room"""
    try:
        result = await engine.room_status(floor, room)
    except TopologyError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"success": True, **result.model_dump(by_alias=True, exclude={"floor", "room"})}


@router.get("/floor-status")
async def floor_status(
    floor: int = Query(...),
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    """Room status for every room on a floor"""
    try:
        rooms = await engine.floor_status(floor)
    except TopologyError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"success": True, "floor": floor, "rooms": [r.model_dump(by_alias=True) for r in rooms]}


@router.post("/shift")
async def shift_booking(
    shift: BookingShift,
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    """Move a booking to another floor/room/bed"""
    try:
        await engine.shift_booking(shift.booking_id, shift.to_floor, shift.to_room, shift.to_bed)
    except BookingNotFoundError as e:
        return JSONResponse(status_code=404, content={"success": False, "message": e.message})
    except (TopologyError, InvalidBedError):
        return {"success": False, "message": "Invalid bed number"}
    except BedOccupiedError as e:
        return {"success": False, "message": e.message}
    return {"success": True}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    name: str = Form(...),
    phone: str = Form(...),
    join_date: date = Form(..., alias="joinDate"),
    floor: int = Form(...),
    room: int = Form(...),
    bed: int = Form(...),
    alt_phone: Optional[str] = Form(None, alias="altPhone"),
    email: Optional[str] = Form(None),
    aadhar_number: Optional[str] = Form(None, alias="aadharNumber"),
    user_id: Optional[str] = Form(None, alias="userId"),
    amount_paid: float = Form(0, alias="amountPaid"),
    photo: Optional[UploadFile] = File(None),
    aadhar_file: Optional[UploadFile] = File(None, alias="aadharFile"),
    engine: AllocationEngine = Depends(get_allocation_engine),
):
    """Check a guest into a bed. Uploaded files are removed again if the booking is rejected."""
    photo_path = await save_upload(photo, "photo")
    aadhar_path = await save_upload(aadhar_file, "aadhar")

    try:
        booking = BookingCreate(
            name=name,
            phone=phone,
            alt_phone=alt_phone,
            email=email,
            aadhar_number=aadhar_number,
            join_date=join_date,
            floor=floor,
            room=room,
            bed=bed,
            user_id=user_id,
            amount_paid=amount_paid,
            photo=photo_path,
            aadhar_file=aadhar_path,
        )
        created = await engine.create_booking(booking)
    except ValidationError as e:
        discard_uploads([photo_path, aadhar_path])
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))
    except AllocationError as e:
        discard_uploads([photo_path, aadhar_path])
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        discard_uploads([photo_path, aadhar_path])
        raise

    return {"success": True, "booking": booking_out(created)}


@router.get("/{booking_id}")
async def get_booking(booking_id: str, engine: AllocationEngine = Depends(get_allocation_engine)):
    try:
        booking = await engine.get_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return booking_out(booking)


@router.delete("/{booking_id}")
async def delete_booking(booking_id: str, engine: AllocationEngine = Depends(get_allocation_engine)):
    """Check out: remove the booking and free its bed"""
    try:
        await engine.delete_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"success": True, "message": "Booking deleted successfully"}
