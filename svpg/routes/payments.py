"""
Manual payment routes: record, history, receipts and the admin overview
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse
from typing import Dict

from svpg.config.settings import settings
from svpg.exceptions import (
    BookingNotFoundError,
    InvalidAdminCodeError,
    PaymentNotFoundError,
    UserNotFoundError,
)
from svpg.models.payment import ManualPaymentCreate, PaymentGroup, PaymentResponse
from svpg.services import payment_service
from svpg.services.receipt_service import receipt_filename, render_receipt
from svpg.utils.helpers import serialize_doc

router = APIRouter(prefix="/payments", tags=["Payments"])


def payment_out(doc: Dict) -> Dict:
    return PaymentResponse.model_validate(serialize_doc(doc)).model_dump(by_alias=True, mode="json")


def failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post("/manual")
async def create_manual_payment(data: ManualPaymentCreate):
    """Record a cash/UPI payment entered by staff"""
    try:
        payment = await payment_service.record_manual_payment(data, settings.PAYMENT_ADMIN_CODE)
    except (InvalidAdminCodeError, UserNotFoundError, BookingNotFoundError) as e:
        return failure(400, e.message)
    return {"success": True, "payment": payment_out(payment)}


@router.get("/all")
async def get_all_grouped():
    """Admin view: every payment grouped by user with running totals"""
    groups = await payment_service.grouped_payments()
    grouped = [
        PaymentGroup.model_validate({
            **group,
            "payments": [serialize_doc(p) for p in group["payments"]],
        }).model_dump(by_alias=True, mode="json")
        for group in groups
    ]
    return {"success": True, "grouped": grouped}


@router.get("/user/{user_id}")
async def get_user_payments(user_id: str):
    """Payment history of a user, newest first"""
    payments = await payment_service.payment_history(user_id)
    return {"success": True, "payments": [payment_out(p) for p in payments]}


@router.get("/{payment_id}/receipt")
async def download_receipt(payment_id: str):
    try:
        payment, links = await payment_service.get_payment(payment_id)
    except PaymentNotFoundError:
        return failure(404, "Not found")

    stream = render_receipt(payment, links)
    return StreamingResponse(
        stream,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={receipt_filename(payment)}"},
    )


@router.delete("/{payment_id}")
async def delete_payment(payment_id: str):
    try:
        await payment_service.delete_payment(payment_id)
    except PaymentNotFoundError as e:
        return failure(404, e.message)
    return {"success": True}
