import csv
import io
from datetime import date

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import OperationalError

from api.equipment import db_manager as equipment_manager
from db_models.equipment import DepreciationRate, Equipment, EquipmentDepreciationYear


async def _create(client, headers, **overrides):
    payload = {
        "serial_number": "C02MP0001",
        "model": "mac_pro",
        "company": "HBL",
        "assigned_to": "Ana Lopez",
        "insured": True,
        "purchase_date": "2015-01-01",
        "purchase_cost": 2000,
    }
    payload.update(overrides)
    return await client.post("/api/v1/equipment", json=payload, headers=headers)


@pytest.mark.anyio
async def test_create_equipment_with_schedule(async_client, auth_headers):
    resp = await _create(async_client, auth_headers)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["serial_number"] == "C02MP0001"
    assert data["label"] == "Mac Pro"
    assert data["rate"] == 0.20
    assert data["residual_pct"] == 0.10
    assert [data[f"depreciation_y{n}"] for n in range(1, 6)] == [400, 400, 400, 400, 200]
    # Bought long ago: clamped to five years and floored at 10%
    assert data["years_exact"] == 5
    assert data["years_elapsed"] == 5
    assert data["book_value_today"] == pytest.approx(200)


@pytest.mark.anyio
async def test_create_equipment_stores_five_year_rows(async_client, auth_headers, db_session):
    resp = await _create(async_client, auth_headers)
    assert resp.status_code == 201

    result = await db_session.execute(
        select(EquipmentDepreciationYear.year_number)
        .where(EquipmentDepreciationYear.serial_number == "C02MP0001")
        .order_by(EquipmentDepreciationYear.year_number)
    )
    assert list(result.scalars().all()) == [1, 2, 3, 4, 5]


@pytest.mark.anyio
async def test_create_duplicate_serial_conflict(async_client, auth_headers):
    resp = await _create(async_client, auth_headers)
    assert resp.status_code == 201

    resp = await _create(async_client, auth_headers, model="lenovo")
    assert resp.status_code == 409
    assert "C02MP0001" in resp.json()["detail"]


@pytest.mark.anyio
async def test_create_equipment_validation(async_client, auth_headers):
    resp = await _create(async_client, auth_headers, serial_number="   ")
    assert resp.status_code == 422

    resp = await _create(async_client, auth_headers, model="dell")
    assert resp.status_code == 422

    resp = await _create(async_client, auth_headers, purchase_cost=-10)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_list_equipment_sorted_by_serial(async_client, auth_headers):
    for serial in ("Z-3", "A-1", "M-2"):
        resp = await _create(async_client, auth_headers, serial_number=serial)
        assert resp.status_code == 201

    resp = await async_client.get("/api/v1/equipment", headers=auth_headers)
    assert resp.status_code == 200, resp.text
    assert [r["serial_number"] for r in resp.json()] == ["A-1", "M-2", "Z-3"]


@pytest.mark.anyio
async def test_get_equipment_not_found(async_client, auth_headers):
    resp = await async_client.get("/api/v1/equipment/NOPE", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_model_without_rate_keeps_full_cost(async_client, auth_headers, db_session):
    await db_session.execute(delete(DepreciationRate).where(DepreciationRate.model == "lenovo"))
    await db_session.commit()

    resp = await _create(async_client, auth_headers, serial_number="PF3LNV01", model="lenovo", purchase_cost=980)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["rate"] is None
    assert data["book_value_today"] == 980
    assert all(data[f"depreciation_y{n}"] == 0 for n in range(1, 6))


@pytest.mark.anyio
async def test_patch_metadata_field(async_client, auth_headers):
    await _create(async_client, auth_headers)

    resp = await async_client.patch(
        "/api/v1/equipment/C02MP0001",
        json={"field": "assigned_to", "value": "Marc Vidal"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["assigned_to"] == "Marc Vidal"

    resp = await async_client.patch(
        "/api/v1/equipment/C02MP0001",
        json={"field": "assigned_to", "value": ""},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["assigned_to"] is None


@pytest.mark.anyio
async def test_patch_cost_regenerates_schedule(async_client, auth_headers):
    await _create(async_client, auth_headers)

    resp = await async_client.patch(
        "/api/v1/equipment/C02MP0001",
        json={"field": "purchase_cost", "value": "1000"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["purchase_cost"] == 1000
    assert [data[f"depreciation_y{n}"] for n in range(1, 6)] == [200, 200, 200, 200, 100]
    assert data["book_value_today"] == pytest.approx(100)


@pytest.mark.anyio
async def test_patch_model_switches_rate(async_client, auth_headers):
    await _create(async_client, auth_headers)

    resp = await async_client.patch(
        "/api/v1/equipment/C02MP0001",
        json={"field": "model", "value": "lenovo"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["model"] == "lenovo"
    assert data["label"] == "Lenovo"
    assert data["rate"] == 0.25
    assert [data[f"depreciation_y{n}"] for n in range(1, 6)] == [500, 500, 500, 300, 0]


@pytest.mark.anyio
async def test_patch_blank_purchase_date_clears_it(async_client, auth_headers):
    await _create(async_client, auth_headers)

    resp = await async_client.patch(
        "/api/v1/equipment/C02MP0001",
        json={"field": "purchase_date", "value": ""},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["purchase_date"] is None
    assert data["years_exact"] == 0
    assert data["book_value_today"] == 2000


@pytest.mark.anyio
async def test_patch_rejects_derived_and_invalid_values(async_client, auth_headers):
    await _create(async_client, auth_headers)

    for body in (
        {"field": "book_value_today", "value": 1},
        {"field": "depreciation_y1", "value": 1},
        {"field": "company", "value": "ACME"},
        {"field": "purchase_cost", "value": -1},
        {"field": "purchase_date", "value": "not-a-date"},
    ):
        resp = await async_client.patch("/api/v1/equipment/C02MP0001", json=body, headers=auth_headers)
        assert resp.status_code == 422, body


@pytest.mark.anyio
async def test_patch_unknown_serial(async_client, auth_headers):
    resp = await async_client.patch(
        "/api/v1/equipment/NOPE",
        json={"field": "insured", "value": True},
        headers=auth_headers,
    )
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_export_csv(async_client, auth_headers):
    await _create(async_client, auth_headers, serial_number="A-1")
    await _create(async_client, auth_headers, serial_number="B-2", model="mac_air", assigned_to=None)

    resp = await async_client.get("/api/v1/equipment/export.csv", headers=auth_headers)
    assert resp.status_code == 200, resp.text
    assert resp.headers["content-type"].startswith("text/csv")
    assert "equipment_depreciation_" in resp.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0][0] == "serial_number"
    assert len(rows) == 3
    assert rows[1][0] == "A-1"
    assert rows[1][6] == "2000.00"
    assert rows[1][7] == "20%"
    assert rows[2][1] == "Mac Air"


@pytest.mark.anyio
async def test_list_rates(async_client, auth_headers):
    resp = await async_client.get("/api/v1/equipment/rates", headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert [r["model"] for r in data] == ["lenovo", "mac_air", "mac_pro"]
    assert data[0]["rate"] == 0.25


@pytest.mark.anyio
async def test_patch_backfills_missing_schedule(async_client, auth_headers, db_session):
    db_session.add(Equipment(
        serial_number="RAW-1",
        model="mac_air",
        company="AJA",
        purchase_date=date(2024, 1, 1),
        purchase_cost=1000.0,
    ))
    await db_session.commit()

    resp = await async_client.patch(
        "/api/v1/equipment/RAW-1",
        json={"field": "assigned_to", "value": "Ana"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["assigned_to"] == "Ana"
    assert data["depreciation_y1"] == 200

    result = await db_session.execute(
        select(func.count(EquipmentDepreciationYear.id))
        .where(EquipmentDepreciationYear.serial_number == "RAW-1")
    )
    assert result.scalar() == 5

    listing = await async_client.get("/api/v1/equipment", headers=auth_headers)
    assert "RAW-1" in [r["serial_number"] for r in listing.json()]


async def _lost_connection(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection lost"))


@pytest.mark.anyio
@pytest.mark.parametrize("failing_fetch", ["fetch_depreciation_rows", "fetch_asset_metadata"])
async def test_fetch_failure_returns_503(async_client, auth_headers, monkeypatch, failing_fetch):
    resp = await _create(async_client, auth_headers)
    assert resp.status_code == 201, resp.text

    monkeypatch.setattr(equipment_manager, failing_fetch, _lost_connection)

    for path in (
        "/api/v1/equipment",
        "/api/v1/equipment/C02MP0001",
        "/api/v1/equipment/export.csv",
        "/api/v1/dashboard/summary",
    ):
        resp = await async_client.get(path, headers=auth_headers)
        assert resp.status_code == 503, path
        assert resp.json()["detail"] == "Could not load equipment data"
