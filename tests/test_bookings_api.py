"""
HTTP tests for the /bookings routes
"""
import os


def check_in_form(floor=1, room=1, bed=1, name="Ravi", **extra):
    form = {
        "name": name,
        "phone": "9000000001",
        "joinDate": "2026-01-05",
        "floor": str(floor),
        "room": str(room),
        "bed": str(bed),
    }
    form.update(extra)
    return form


class TestCreateBookingApi:

    async def test_create_returns_booking(self, client, upload_dir):
        resp = await client.post(
            "/bookings",
            data=check_in_form(2, 3, 1, altPhone="9000000002", amountPaid="1500"),
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        booking = body["booking"]
        assert booking["name"] == "Ravi"
        assert booking["altPhone"] == "9000000002"
        assert booking["joinDate"] == "2026-01-05"
        assert booking["amountPaid"] == 1500
        assert (booking["floor"], booking["room"], booking["bed"]) == (2, 3, 1)
        assert booking["_id"]

    async def test_uploads_are_stored_and_referenced(self, client, upload_dir):
        resp = await client.post(
            "/bookings",
            data=check_in_form(),
            files={
                "photo": ("ravi.jpg", b"jpeg-bytes", "image/jpeg"),
                "aadharFile": ("aadhar.pdf", b"pdf-bytes", "application/pdf"),
            },
        )
        assert resp.status_code == 201
        booking = resp.json()["booking"]
        assert booking["photo"].startswith("uploads/photo-")
        assert booking["aadharFile"].startswith("uploads/aadhar-")
        assert (upload_dir / os.path.basename(booking["photo"])).read_bytes() == b"jpeg-bytes"

    async def test_invalid_bed_rejected(self, client, upload_dir):
        resp = await client.post("/bookings", data=check_in_form(1, 1, 3))
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid bed for this room sharing type"

    async def test_occupied_bed_rejected_and_upload_discarded(self, client, upload_dir):
        first = await client.post("/bookings", data=check_in_form(name="Asha"))
        assert first.status_code == 201

        resp = await client.post(
            "/bookings",
            data=check_in_form(name="Bala"),
            files={"photo": ("bala.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Bed already booked by: Asha"
        assert list(upload_dir.iterdir()) == []

    async def test_unknown_room_rejected(self, client, upload_dir):
        resp = await client.post("/bookings", data=check_in_form(6, 5, 1))
        assert resp.status_code == 400


class TestRoomStatusApi:

    async def test_room_status_shape(self, client, upload_dir):
        await client.post("/bookings", data=check_in_form(1, 3, 2, name="Chitra"))

        resp = await client.get("/bookings/room-status", params={"floor": 1, "room": 3})
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["totalBeds"] == 3
        assert [(b["bed"], b["name"]) for b in body["booked"]] == [(2, "Chitra")]
        assert body["available"] == [1, 3]

    async def test_room_status_unknown_floor(self, client):
        resp = await client.get("/bookings/room-status", params={"floor": 9, "room": 1})
        assert resp.status_code == 400

    async def test_floor_status(self, client):
        resp = await client.get("/bookings/floor-status", params={"floor": 6})
        assert resp.status_code == 200
        assert [r["totalBeds"] for r in resp.json()["rooms"]] == [2, 2, 3, 3]


class TestShiftApi:

    async def test_shift_and_release(self, client, upload_dir):
        created = await client.post("/bookings", data=check_in_form(1, 1, 1, name="Deepa"))
        booking_id = created.json()["booking"]["_id"]

        resp = await client.post(
            "/bookings/shift",
            json={"bookingId": booking_id, "toFloor": 3, "toRoom": 4, "toBed": 3},
        )
        assert resp.json() == {"success": True}

        old = (await client.get("/bookings/room-status", params={"floor": 1, "room": 1})).json()
        new = (await client.get("/bookings/room-status", params={"floor": 3, "room": 4})).json()
        assert old["available"] == [1, 2]
        assert [(b["bed"], b["name"]) for b in new["booked"]] == [(3, "Deepa")]

    async def test_shift_onto_own_bed(self, client, upload_dir):
        created = await client.post("/bookings", data=check_in_form(2, 2, 2, name="Esha"))
        booking_id = created.json()["booking"]["_id"]

        resp = await client.post(
            "/bookings/shift",
            json={"bookingId": booking_id, "toFloor": 2, "toRoom": 2, "toBed": 2},
        )
        assert resp.json() == {"success": True}

    async def test_shift_conflict_reports_occupant(self, client, upload_dir):
        mover = await client.post("/bookings", data=check_in_form(1, 1, 1, name="Farah"))
        await client.post("/bookings", data=check_in_form(1, 1, 2, name="Gita"))

        resp = await client.post(
            "/bookings/shift",
            json={"bookingId": mover.json()["booking"]["_id"], "toFloor": 1, "toRoom": 1, "toBed": 2},
        )
        assert resp.status_code == 200
        assert resp.json() == {"success": False, "message": "Bed already booked by: Gita"}

    async def test_shift_invalid_bed(self, client, upload_dir):
        mover = await client.post("/bookings", data=check_in_form(1, 1, 1))
        resp = await client.post(
            "/bookings/shift",
            json={"bookingId": mover.json()["booking"]["_id"], "toFloor": 1, "toRoom": 1, "toBed": 5},
        )
        assert resp.json() == {"success": False, "message": "Invalid bed number"}

    async def test_shift_unknown_booking(self, client):
        resp = await client.post(
            "/bookings/shift",
            json={"bookingId": "665f1c2e9b1e8a0012345678", "toFloor": 1, "toRoom": 1, "toBed": 1},
        )
        assert resp.status_code == 404
        assert resp.json()["success"] is False


class TestListAndDeleteApi:

    async def test_list_and_get(self, client, upload_dir):
        created = await client.post("/bookings", data=check_in_form(4, 2, 1, name="Hari"))
        booking_id = created.json()["booking"]["_id"]

        listing = await client.get("/bookings")
        assert [b["_id"] for b in listing.json()] == [booking_id]

        single = await client.get(f"/bookings/{booking_id}")
        assert single.json()["name"] == "Hari"

    async def test_delete_frees_bed(self, client, upload_dir):
        created = await client.post("/bookings", data=check_in_form(5, 6, 2, name="Indu"))
        booking_id = created.json()["booking"]["_id"]

        resp = await client.delete(f"/bookings/{booking_id}")
        assert resp.json() == {"success": True, "message": "Booking deleted successfully"}

        status = (await client.get("/bookings/room-status", params={"floor": 5, "room": 6})).json()
        assert status["available"] == [1, 2]

    async def test_delete_unknown(self, client):
        resp = await client.delete("/bookings/665f1c2e9b1e8a0012345678")
        assert resp.status_code == 404
