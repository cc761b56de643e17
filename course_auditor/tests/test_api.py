import pytest
from fastapi.testclient import TestClient

from course_auditor.app.coordinator.classifier import ALL_CLEAR_SUMMARY
from course_auditor.app.main import app
from course_auditor.tests.fixtures.snapshot_factory import (
    complete_snapshot,
    single_module_snapshot,
)


BASE = "/projects/proj-1"


def _payload(snapshot):
    return snapshot.model_dump(
        mode="json",
        include={"analysis", "outline", "design_documents"},
    )


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_report_missing_before_first_run(client):
    response = client.get(f"{BASE}/reports/gap-analysis")

    assert response.status_code == 404


def test_put_snapshot_then_run_analysis(client):
    response = client.put(
        f"{BASE}/snapshot", json=_payload(single_module_snapshot())
    )
    assert response.status_code == 204

    response = client.post(f"{BASE}/analysis")
    assert response.status_code == 200

    report = response.json()
    assert report["project_id"] == "proj-1"
    assert report["battery"] == "gap-analysis"
    assert report["score"] == 60
    assert report["findings"]

    stored = client.get(f"{BASE}/reports/gap-analysis").json()
    assert stored["report_id"] == report["report_id"]


def test_complete_project_is_all_clear(client):
    client.put(f"{BASE}/snapshot", json=_payload(complete_snapshot()))

    report = client.post(f"{BASE}/analysis").json()

    assert report["score"] == 100
    assert report["findings"] == []
    assert report["summary"] == ALL_CLEAR_SUMMARY


def test_unknown_battery_is_not_found(client):
    response = client.post(f"{BASE}/analysis", params={"battery": "nope"})

    assert response.status_code == 404


def test_resolve_finding_and_views(client):
    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    report = client.post(f"{BASE}/analysis").json()
    target = report["findings"][0]["finding_id"]

    response = client.post(
        f"{BASE}/reports/gap-analysis/findings/{target}/resolve"
    )
    assert response.status_code == 204

    items = client.get(
        f"{BASE}/reports/gap-analysis/action-items", params={"limit": 3}
    ).json()
    assert target not in [f["finding_id"] for f in items["items"]]
    assert len(items["items"]) == 3
    assert items["total"] == len(report["findings"]) - 1

    groups = client.get(f"{BASE}/reports/gap-analysis/categories").json()
    assert [g["label"] for g in groups] == [
        "ADDIE Phases",
        "Assessments",
        "Content Coverage",
        "Structural",
    ]


def test_resolve_unknown_finding_is_silent(client):
    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    client.post(f"{BASE}/analysis")

    response = client.post(
        f"{BASE}/reports/gap-analysis/findings/GAP-INFO-stale/resolve"
    )

    assert response.status_code == 204


def test_delete_project_drops_report(client):
    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    client.post(f"{BASE}/analysis")

    response = client.delete(BASE)

    assert response.status_code == 204
    assert client.get(f"{BASE}/reports/gap-analysis").status_code == 404


@pytest.mark.parametrize("limit", [0, -1])
def test_action_items_reject_non_positive_limit(client, limit):
    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    client.post(f"{BASE}/analysis")

    response = client.get(
        f"{BASE}/reports/gap-analysis/action-items", params={"limit": limit}
    )

    assert response.status_code == 422


def test_summary_findings_route(client):
    assert client.get(f"{BASE}/reports/gap-analysis/summary").status_code == 404

    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    report = client.post(f"{BASE}/analysis").json()

    response = client.get(f"{BASE}/reports/gap-analysis/summary")

    assert response.status_code == 200
    summary = response.json()
    descriptions = [f["description"] for f in summary]
    assert len(descriptions) == len(set(descriptions))
    assert {f["finding_id"] for f in summary} <= {
        f["finding_id"] for f in report["findings"]
    }


def test_project_events_route(client):
    client.put(f"{BASE}/snapshot", json=_payload(single_module_snapshot()))
    client.post(f"{BASE}/analysis")
    client.post("/projects/proj-2/analysis")

    events = client.get(f"{BASE}/events").json()

    types = [e["event_type"] for e in events]
    assert types[0] == "analysis_started"
    assert types[-1] == "analysis_completed"
    assert "rule_evaluated" in types
    assert {e["project_id"] for e in events} == {"proj-1"}
