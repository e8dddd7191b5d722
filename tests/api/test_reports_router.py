from unittest.mock import AsyncMock

import pytest

from spacecat_api.api.deps.dependencies import get_report_service
from spacecat_api.core.exceptions import ConfigurationError, ValidationError

SITE_ID = "123e4567-e89b-12d3-a456-426614174000"
REPORT_ID = "523e4567-e89b-12d3-a456-426614174000"
BASE = f"/api/v1/sites/{SITE_ID}/reports"


@pytest.fixture
def mock_report_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_report_service] = lambda: service
    return service


def test_create_report(client, mock_report_service):
    mock_report_service.create_report.return_value = {"message": "Report generation job queued", "jobId": REPORT_ID}
    payload = {
        "reportType": "performance",
        "reportPeriod": {"startDate": "2025-01-01", "endDate": "2025-01-31"},
        "comparisonPeriod": {"startDate": "2024-12-01", "endDate": "2024-12-31"},
    }

    response = client.post(BASE, json=payload)

    assert response.status_code == 200
    assert response.json()["jobId"] == REPORT_ID
    mock_report_service.create_report.assert_awaited_once_with(SITE_ID, payload)


def test_create_duplicate_report(client, mock_report_service):
    mock_report_service.create_report.side_effect = ValidationError("A report with the same type and periods already exists")

    response = client.post(BASE, json={})

    assert response.status_code == 400


def test_missing_queue_is_server_error(client, mock_report_service):
    mock_report_service.create_report.side_effect = ConfigurationError("Report jobs queue is not configured")

    response = client.post(BASE, json={})

    assert response.status_code == ConfigurationError.status_code


def test_list_get_delete_update(client, mock_report_service):
    mock_report_service.list_reports.return_value = [{"id": REPORT_ID}]
    mock_report_service.get_report.return_value = {"id": REPORT_ID, "status": "success"}
    mock_report_service.delete_report.return_value = {"message": "Report deleted successfully"}
    mock_report_service.update_enhanced_report.return_value = {"id": REPORT_ID}

    assert client.get(BASE).json() == [{"id": REPORT_ID}]
    assert client.get(f"{BASE}/{REPORT_ID}").json()["status"] == "success"
    assert client.delete(f"{BASE}/{REPORT_ID}").status_code == 200
    assert client.patch(f"{BASE}/{REPORT_ID}", json={"summary": "ok"}).status_code == 200

    mock_report_service.update_enhanced_report.assert_awaited_once_with(SITE_ID, REPORT_ID, {"summary": "ok"})
