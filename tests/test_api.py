"""
tests/test_api.py

End-to-end tests of the HTTP surface with FastAPI's TestClient.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.dataset_store import get_dataset_store

CSV_CONTENT = "\n".join(
    [
        "说明",
        "YEAR,MONTH,CATEGORY,KEYWORDS,TTL_Buzz,TTL_Buzz_YOY,小红书_SEARCH,象限图",
        "2024,1,裤子,阔腿裤,100,10%,5,明星",
        "2024,2,裤子,阔腿裤,150,5%,6,明星",
        "2024,1,包,托特包,120,5%,7,",
        "2024,2,包,托特包,oops,5%,8,",
    ]
).encode("utf-8")


@pytest.fixture()
def client() -> Iterator[TestClient]:
    get_dataset_store().clear()
    yield TestClient(app)
    get_dataset_store().clear()


def _import(client: TestClient) -> dict:
    response = client.post(
        "/workbooks/import",
        files={"file": ("buzz.csv", CSV_CONTENT, "text/csv")},
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestIngestion:
    def test_analytics_before_import_is_409(self, client: TestClient) -> None:
        response = client.get("/dashboard/stats")

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "dataset_not_loaded"

    def test_rejects_non_spreadsheet(self, client: TestClient) -> None:
        response = client.post("/workbooks/import", files={"file": ("notes.txt", b"x", "text/plain")})
        assert response.status_code == 400

    def test_import_reports_warnings_and_mapping(self, client: TestClient) -> None:
        body = _import(client)

        assert body["sheet_name"] == "Sheet1"
        assert body["rows_imported"] == 4
        assert body["warning_count"] == 1
        assert body["warnings"][0].startswith("Row 6: buzz_total")
        assert body["columns"][0] == {"column": 1, "header": "YEAR", "canonical_field": "year", "strategy": "exact"}

    def test_list_sheets(self, client: TestClient) -> None:
        response = client.post("/workbooks/sheets", files={"file": ("buzz.csv", CSV_CONTENT, "text/csv")})

        assert response.status_code == 200
        assert response.json()["sheets"][0]["row_count"] == 4

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json()["dataset_loaded"] is False
        _import(client)
        assert client.get("/health").json() == {"status": "ok", "dataset_loaded": True, "records": 4}


class TestDashboard:
    def test_stats_and_filters(self, client: TestClient) -> None:
        _import(client)

        everything = client.get("/dashboard/stats").json()
        pants = client.get("/dashboard/stats", params={"categories": "裤子"}).json()

        assert everything["total_buzz"] == 370.0
        assert everything["keyword_count"] == 2
        assert pants["total_buzz"] == 250.0

    def test_top_keywords_use_latest_snapshot(self, client: TestClient) -> None:
        _import(client)

        points = client.get("/dashboard/top-keywords", params={"limit": 1}).json()["points"]

        assert len(points) == 1
        assert (points[0]["keyword"], points[0]["buzz"], points[0]["search"]) == ("阔腿裤", 150.0, 6.0)
        assert points[0]["yoy"] == pytest.approx(5.0)
        assert points[0]["quadrant"] == "明星"

    def test_trend_rejects_unknown_metric(self, client: TestClient) -> None:
        _import(client)
        assert client.get("/dashboard/trend", params={"metric": "likes"}).status_code == 400

    def test_filter_options(self, client: TestClient) -> None:
        _import(client)

        options = client.get("/dashboard/filter-options").json()

        assert options["categories"] == ["包", "裤子"]
        assert options["periods"] == ["2024-Jan", "2024-Feb"]


class TestAnalyticsAndExport:
    def test_correlation_matrix_shape(self, client: TestClient) -> None:
        _import(client)

        response = client.get("/analytics/correlation")

        assert response.status_code == 200
        body = response.json()
        assert len(body["labels"]) == len(body["matrix"]) == 4

    def test_invalid_dimension(self, client: TestClient) -> None:
        _import(client)
        assert client.get("/analytics/dimensions/裤子", params={"dimension": "colour"}).status_code == 400

    def test_export_json(self, client: TestClient) -> None:
        _import(client)

        response = client.get(
            "/export",
            params={"format": "json", "columns": "keyword,buzz_total", "categories": "包"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "rows": 2,
            "fields": ["关键词", "总声量"],
            "data": [{"关键词": "托特包", "总声量": 120.0}, {"关键词": "托特包", "总声量": 0.0}],
        }

    def test_export_csv_has_bom(self, client: TestClient) -> None:
        _import(client)

        response = client.get("/export", params={"columns": "keyword"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.content.startswith("\ufeff".encode("utf-8"))
        assert response.headers["x-row-count"] == "4"

    def test_export_rejects_unknown_format_and_column(self, client: TestClient) -> None:
        _import(client)

        assert client.get("/export", params={"format": "pdf"}).status_code == 400
        assert client.get("/export", params={"columns": "likes"}).status_code == 400
