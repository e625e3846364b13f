"""Report Routes — query parameters, echoed filters and error mapping."""


async def test_default_report_is_today(client, add_worker, add_order):
    await add_worker("W1", company="ACME", cost_center="ops")
    await add_order("W1", "2026-07-15", company="ACME")
    await add_order("W1", "2026-07-14", company="ACME")
    res = await client.get("/api/v1/reports")
    assert res.status_code == 200
    body = res.json()
    assert len(body["orders"]) == 1
    assert body["orders"][0]["cost_center"] == "ops"
    assert body["summary"] == {"TOTAL": 1, "ACME": 1}
    assert body["cost_center_summary"] == {"OPS": 1}
    assert body["filters"]["mode"] == "single-date"
    assert body["filters"]["date"] == "2026-07-15"


async def test_range_report_echoes_bounds(client, add_order):
    await add_order("W1", "2026-07-11")
    res = await client.get("/api/v1/reports", params={
        "mode": "range", "start_date": "2026-07-10", "end_date": "2026-07-12",
        "employer": "all",
    })
    body = res.json()
    assert body["summary"]["TOTAL"] == 1
    assert body["filters"]["start_date"] == "2026-07-10"
    assert body["filters"]["end_date"] == "2026-07-12"
    assert body["filters"]["employer"] is None


async def test_empty_range_report(client):
    res = await client.get("/api/v1/reports", params={"mode": "range"})
    assert res.status_code == 200
    assert res.json()["orders"] == []
    assert res.json()["summary"] == {"TOTAL": 0}


async def test_worker_filter_outside_all_history_is_400(client):
    res = await client.get("/api/v1/reports", params={
        "mode": "month", "worker": "12345678K",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PARAMETERS"


async def test_unknown_mode_is_validation_error(client):
    res = await client.get("/api/v1/reports", params={"mode": "fortnight"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_by_worker_report(client, add_order):
    await add_order("12345678K", "2026-03-01")
    await add_order("OTHER", "2026-03-01")
    res = await client.get("/api/v1/reports", params={
        "mode": "by-worker", "worker": "12.345.678-K",
    })
    body = res.json()
    assert [o["worker_identity"] for o in body["orders"]] == ["12345678K"]
    assert body["filters"]["worker"] == "12345678K"
