from decimal import Decimal

import pytest
from httpx import AsyncClient


async def _create_student(client: AsyncClient, first_name: str = "Jane", last_name: str = "Oduor") -> int:
    response = await client.post(
        "/api/v1/students",
        json={"first_name": first_name, "last_name": last_name, "gender": "Female"},
    )
    assert response.status_code == 201
    return response.json()["student_id"]


@pytest.mark.asyncio
async def test_fee_and_payment_flow(client: AsyncClient) -> None:
    student_id = await _create_student(client)

    response = await client.post("/api/v1/fees", json={"student_id": student_id, "amount_due": "20000.00"})
    assert response.status_code == 201
    assert response.json()["payment_status"] == "Unpaid"

    response = await client.post(
        "/api/v1/payments",
        json={"student_id": student_id, "amount": "15000.00", "payment_date": "2025-03-10"},
    )
    assert response.status_code == 201
    receipt = response.json()
    assert receipt["payment"]["student_id"] == student_id
    assert Decimal(receipt["fee"]["amount_paid"]) == Decimal("15000")
    assert receipt["fee"]["payment_status"] == "Partially Paid"

    response = await client.post("/api/v1/payments", json={"student_id": student_id, "amount": "5000"})
    assert response.status_code == 201
    assert response.json()["fee"]["payment_status"] == "Paid"

    response = await client.get(f"/api/v1/fees/{student_id}")
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["amount_paid"]) == Decimal("20000")
    assert Decimal(data["balance"]) == Decimal("0")

    response = await client.get(f"/api/v1/payments/student/{student_id}/total")
    assert Decimal(response.json()["total_paid"]) == Decimal("20000")

    response = await client.get("/api/v1/fees", params={"payment_status": "Paid"})
    assert [f["student_id"] for f in response.json()] == [student_id]


@pytest.mark.asyncio
async def test_payment_errors(client: AsyncClient) -> None:
    student_id = await _create_student(client)
    await client.post("/api/v1/fees", json={"student_id": student_id, "amount_due": "20000"})

    response = await client.post("/api/v1/payments", json={"student_id": 999, "amount": "100"})
    assert response.status_code == 404

    response = await client.post("/api/v1/payments", json={"student_id": student_id, "amount": "-50"})
    assert response.status_code == 400

    response = await client.get(f"/api/v1/payments/student/{student_id}")
    assert response.json() == []

    no_fee_student = await _create_student(client, "Tom", "Njoroge")
    response = await client.post("/api/v1/payments", json={"student_id": no_fee_student, "amount": "100"})
    assert response.status_code == 409

    response = await client.post("/api/v1/fees", json={"student_id": student_id, "amount_due": "1"})
    assert response.status_code == 409

    response = await client.delete("/api/v1/payments/4242")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_payment_and_reconcile(client: AsyncClient) -> None:
    student_id = await _create_student(client)
    await client.post("/api/v1/fees", json={"student_id": student_id, "amount_due": "20000"})
    receipt = (await client.post("/api/v1/payments", json={"student_id": student_id, "amount": "20000"})).json()

    response = await client.delete(f"/api/v1/payments/{receipt['payment']['payment_id']}")
    assert response.status_code == 200
    assert response.json()["fee"]["payment_status"] == "Unpaid"

    response = await client.post(f"/api/v1/fees/{student_id}/reconcile")
    assert response.status_code == 200
    assert response.json()["payment_status"] == "Unpaid"
    assert Decimal(response.json()["amount_paid"]) == Decimal("0")


@pytest.mark.asyncio
async def test_reconcile_without_fee_returns_conflict(client: AsyncClient) -> None:
    student_id = await _create_student(client)
    response = await client.post(f"/api/v1/fees/{student_id}/reconcile")
    assert response.status_code == 409
    response = await client.get(f"/api/v1/fees/{student_id}")
    assert response.status_code == 404
