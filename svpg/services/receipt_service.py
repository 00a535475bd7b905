"""
PDF receipts for recorded payments
"""
import io
from typing import Dict

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from svpg.services.payment_service import PaymentLinks
from svpg.utils.helpers import format_room_number, to_local

RECEIPT_TITLE = "S.V PG - Payment Receipt"

SECTION_STYLE = TableStyle([
    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 11),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ("LINEBELOW", (0, -1), (-1, -1), 0.5, colors.grey),
])


def receipt_filename(payment: Dict) -> str:
    return f"receipt-{payment['_id']}.pdf"


def receipt_fields(payment: Dict, links: PaymentLinks) -> Dict[str, str]:
    """Values printed on the receipt; the payment's own snapshot wins over the live booking"""
    booking = links.booking
    room = payment.get("room_number") or (
        format_room_number(booking["floor"], booking["room"]) if booking else "N/A"
    )
    bed = payment.get("bed_number") or (booking["bed"] if booking else "N/A")

    fields = {
        "receipt_id": str(payment["_id"]),
        "date": to_local(payment["created_at"]).strftime("%d %b %Y, %I:%M %p"),
        "name": payment.get("name") or "Unknown",
        "phone": payment.get("phone") or "N/A",
        "room": str(room),
        "bed": str(bed),
        "amount": f"Rs. {payment.get('amount', 0):,.2f}",
        "code": payment.get("code") or "",
    }
    if links.user:
        u = links.user
        fields["user"] = u.get("name") or u.get("username") or u.get("email") or "N/A"
    if booking:
        fields["booked_name"] = booking.get("name") or "N/A"
    return fields


def render_receipt(payment: Dict, links: PaymentLinks) -> io.BytesIO:
    """Render the fixed receipt layout and return the PDF positioned at the start"""
    fields = receipt_fields(payment, links)

    stream = io.BytesIO()
    doc = SimpleDocTemplate(stream, pagesize=A4, title=receipt_filename(payment))
    styles = getSampleStyleSheet()
    elems = [
        Paragraph(f"<b>{RECEIPT_TITLE}</b>", styles["Title"]),
        Spacer(1, 0.3 * cm),
    ]

    def section(heading, rows):
        elems.append(Paragraph(heading, styles["Heading2"]))
        t = Table(rows, colWidths=[5 * cm, 10 * cm], hAlign="LEFT")
        t.setStyle(SECTION_STYLE)
        elems.append(t)
        elems.append(Spacer(1, 0.4 * cm))

    section("Receipt", [["Receipt ID", fields["receipt_id"]], ["Date", fields["date"]]])

    payer = [["Name", fields["name"]], ["Phone", fields["phone"]]]
    if "user" in fields:
        payer.append(["User", fields["user"]])
    section("Payer Details", payer)

    room = [["Room", fields["room"]], ["Bed", fields["bed"]]]
    if "booked_name" in fields:
        room.append(["Booked Name", fields["booked_name"]])
    section("Booking / Room", room)

    section("Payment", [["Amount", fields["amount"]], ["Admin Code", fields["code"]]])

    doc.build(elems)
    stream.seek(0)
    return stream
