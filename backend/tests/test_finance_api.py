"""Finance upload, month management and dashboard API tests."""

import pytest
from httpx import AsyncClient

SALES_BY_DAY_CSV = (
    "Date,Orders,Cash,EFTPOS,Online,On Account,Uber Eats,Menulog,DoorDash,"
    "Delivereasy,EFTPOS Surcharge,Discounts,Refunds,Tax,Total\n"
    '"Mon, 03 Nov",40,$100.00,$800.00,$0.00,$0.00,$150.00,$0.00,$0.00,$0.00,$5.00,$0.00,$0.00,$137.00,"$1,055.00"\n'
    '"Tue, 04 Nov",35,$50.00,$700.00,$0.00,$0.00,$100.00,$0.00,$0.00,$0.00,$4.00,$10.00,$0.00,$111.00,$854.00\n'
)

PRODUCTS_CSV = (
    "Product,Quantity,Tax,Total,% of Sale\n"
    "Taco,10,$3.00,$100.00,50%\n"
)

BANK_CSV = (
    "Date,Amount,Payee\n"
    "03/11/25,1200.00,HOT LIKE A MEXICAN\n"
    "04/11/25,-350.50,GILMOURS AUCKLAND\n"
    "05/11/25,-100.00,RANDOM SHOP\n"
)

DEC_BANK_CSV = (
    "Date,Amount,Payee\n"
    "01/12/25,900.00,HOT LIKE A MEXICAN\n"
    "02/12/25,-200.00,GILMOURS AUCKLAND\n"
)


def _files(*pairs):
    return [("files", (name, text.encode(), "text/csv")) for name, text in pairs]


async def _upload(client, headers, *pairs, year="2025"):
    return await client.post(
        "/api/finance/upload",
        files=_files(*pairs),
        data={"year": year},
        headers=headers,
    )


@pytest.mark.api
class TestFinanceUpload:
    @pytest.mark.asyncio
    async def test_upload_detects_month(self, client: AsyncClient, auth_headers):
        resp = await _upload(
            client, auth_headers,
            ("sales.csv", SALES_BY_DAY_CSV),
            ("hot-mexican.csv", BANK_CSV),
            ("readme.txt", "hello"),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["month"] == "2025-11"
        assert body["processed"] == ["sales_by_day", "bank_restaurant"]
        assert body["errors"] == ["readme.txt: Not a CSV file"]

        months = (await client.get("/api/finance/months", headers=auth_headers)).json()
        assert len(months) == 1
        assert months[0]["days"] == 2
        assert months[0]["transactions"] == 3
        assert months[0]["uploaded_by"] == "Martin"

    @pytest.mark.asyncio
    async def test_nothing_importable(self, client: AsyncClient, auth_headers):
        resp = await _upload(client, auth_headers, ("mystery.csv", "a,b\n1,2"))
        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "CSV_FORMAT_ERROR"
        assert error["details"]["errors"] == ["mystery.csv: Could not detect file type"]

    @pytest.mark.asyncio
    async def test_second_upload_appends_bank_rows(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("sales.csv", SALES_BY_DAY_CSV), ("bank.csv", BANK_CSV))
        await _upload(client, auth_headers, ("products.csv", PRODUCTS_CSV), ("bank.csv", BANK_CSV))

        months = (await client.get("/api/finance/months", headers=auth_headers)).json()
        assert len(months) == 1
        assert months[0]["days"] == 2
        assert months[0]["transactions"] == 6

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        resp = await client.get("/api/finance/months")
        assert resp.status_code == 401


@pytest.mark.api
class TestFinanceMonths:
    @pytest.mark.asyncio
    async def test_delete_one_month(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("bank.csv", BANK_CSV))
        await _upload(client, auth_headers, ("bank.csv", DEC_BANK_CSV))

        resp = await client.delete("/api/finance/months/2025-11", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"deleted": 1}

        months = (await client.get("/api/finance/months", headers=auth_headers)).json()
        assert [m["month"] for m in months] == ["2025-12"]

    @pytest.mark.asyncio
    async def test_delete_missing_month(self, client: AsyncClient, auth_headers):
        resp = await client.delete("/api/finance/months/2020-01", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_delete_all(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("bank.csv", BANK_CSV))
        await _upload(client, auth_headers, ("bank.csv", DEC_BANK_CSV))

        resp = await client.delete("/api/finance/months", headers=auth_headers)
        assert resp.json() == {"deleted": 2}
        assert (await client.get("/api/finance/months", headers=auth_headers)).json() == []


@pytest.mark.api
class TestFinanceDashboard:
    @pytest.mark.asyncio
    async def test_dashboard_all_months(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("sales.csv", SALES_BY_DAY_CSV), ("bank.csv", BANK_CSV))
        await _upload(client, auth_headers, ("bank.csv", DEC_BANK_CSV))

        resp = await client.get("/api/finance/dashboard", params={"year": 2025}, headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["months"] == ["2025-11", "2025-12"]
        assert body["summary"]["total_days"] == 2
        assert body["metrics"]["total_income"] == 2100
        assert body["metrics"]["total_orders"] == 75
        monthly = body["cash_flow"]["month"]
        assert [p["net"] for p in monthly] == [749.5, 700]

    @pytest.mark.asyncio
    async def test_dashboard_selected_month(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("bank.csv", BANK_CSV))
        await _upload(client, auth_headers, ("bank.csv", DEC_BANK_CSV))

        resp = await client.get(
            "/api/finance/dashboard",
            params={"months": ["2025-12"]},
            headers=auth_headers,
        )
        body = resp.json()
        assert body["months"] == ["2025-12"]
        assert body["metrics"]["total_income"] == 900

    @pytest.mark.asyncio
    async def test_empty_dashboard_has_no_score(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/finance/dashboard", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["metrics"]["health_score"]["status"] == "No Data"

    @pytest.mark.asyncio
    async def test_cash_flow_and_sales_series(self, client: AsyncClient, auth_headers):
        await _upload(client, auth_headers, ("sales.csv", SALES_BY_DAY_CSV), ("bank.csv", BANK_CSV))

        flow = (await client.get(
            "/api/finance/cash-flow", params={"period": "day"}, headers=auth_headers
        )).json()
        assert [p["period_start"] for p in flow] == ["2025-11-03", "2025-11-04", "2025-11-05"]

        sales = (await client.get(
            "/api/finance/sales", params={"period": "week", "year": 2025}, headers=auth_headers
        )).json()
        assert sales == [{"period_start": "2025-11-03", "total": 1909.0, "orders": 75, "days": 2}]

    @pytest.mark.asyncio
    async def test_unknown_period_rejected(self, client: AsyncClient, auth_headers):
        resp = await client.get(
            "/api/finance/cash-flow", params={"period": "fortnight"}, headers=auth_headers
        )
        assert resp.status_code == 422


@pytest.mark.api
class TestClassifications:
    @pytest.mark.asyncio
    async def test_import_and_reimport(self, client: AsyncClient, auth_headers):
        text = "payee,category,user_correction,confidence\nGILMOURS AUCKLAND,Food Supplies,,High\n"
        files = {"file": ("classes.csv", text.encode(), "text/csv")}

        resp = await client.post("/api/finance/classifications/import", files=files, headers=auth_headers)
        assert resp.json() == {"total_rows": 1, "created": 1, "updated": 0}

        files = {"file": ("classes.csv", text.replace(",,High", ",Supplies,High").encode(), "text/csv")}
        resp = await client.post("/api/finance/classifications/import", files=files, headers=auth_headers)
        assert resp.json() == {"total_rows": 1, "created": 0, "updated": 1}

        rows = (await client.get("/api/finance/classifications", headers=auth_headers)).json()
        assert rows == [{
            "payee": "GILMOURS AUCKLAND",
            "category": "Food Supplies",
            "user_correction": "Supplies",
            "confidence": "High",
        }]

    @pytest.mark.asyncio
    async def test_classified_expenses_feed_prime_cost(self, client: AsyncClient, auth_headers):
        text = "payee,category,user_correction,confidence\nGILMOURS AUCKLAND,Food Supplies,,High\n"
        await client.post(
            "/api/finance/classifications/import",
            files={"file": ("c.csv", text.encode(), "text/csv")},
            headers=auth_headers,
        )
        await _upload(client, auth_headers, ("bank.csv", BANK_CSV))

        metrics = (await client.get("/api/finance/dashboard", headers=auth_headers)).json()["metrics"]
        assert metrics["prime_cost"] == 350.5

    @pytest.mark.asyncio
    async def test_empty_file(self, client: AsyncClient, auth_headers):
        files = {"file": ("c.csv", b"payee,category\n", "text/csv")}
        resp = await client.post("/api/finance/classifications/import", files=files, headers=auth_headers)
        assert resp.status_code == 422
