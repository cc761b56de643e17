import pytest

from course_auditor.app.config import AuditorConfig
from course_auditor.app.coordinator.classifier import ALL_CLEAR_SUMMARY
from course_auditor.app.coordinator.coordinator import (
    GapAnalysisCoordinator,
    UnknownBatteryError,
)
from course_auditor.app.events import GapEventType, MemoryEventEmitter
from course_auditor.app.schemas.findings import FindingCategory, Severity
from course_auditor.app.snapshot.source import InMemoryProjectSource
from course_auditor.tests.fixtures.snapshot_factory import (
    complete_snapshot,
    single_module_snapshot,
    source_with,
)


def _coordinator(snapshot=None, **config):
    source = InMemoryProjectSource()
    if snapshot is not None:
        source_with(snapshot, source)
    events = MemoryEventEmitter()
    coordinator = GapAnalysisCoordinator(
        config=AuditorConfig(**config),
        source=source,
        emitter=events,
    )
    return coordinator, source, events


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------

def test_unknown_project_runs_as_empty_project():
    coordinator, _, _ = _coordinator()

    report = coordinator.run_analysis("never-seen")

    assert report.score == 0
    assert report.project_id == "never-seen"
    assert report.battery == "gap-analysis"
    assert any(f.title == "No needs analysis report" for f in report.findings)


def test_complete_project_reports_all_clear():
    coordinator, _, _ = _coordinator(complete_snapshot("p"))

    report = coordinator.run_analysis("p")

    assert report.score == 100
    assert report.findings == []
    assert report.summary == ALL_CLEAR_SUMMARY
    assert report.completeness.completed == report.completeness.expected


def test_score_and_findings_come_from_the_same_snapshot():
    coordinator, _, _ = _coordinator(single_module_snapshot("p"))

    report = coordinator.run_analysis("p")

    failed_checklist = {
        f.rule_id for f in report.findings if f.category is FindingCategory.ADDIE
    }
    assert not failed_checklist & set(report.completeness.satisfied_rules)
    assert report.score == report.completeness.score


def test_rerun_reflects_new_project_data():
    coordinator, source, _ = _coordinator(single_module_snapshot("p"))
    first = coordinator.run_analysis("p")

    source_with(complete_snapshot("p"), source)
    second = coordinator.run_analysis("p")

    assert first.score < second.score == 100
    assert coordinator.get_report("p") is second
    assert first.report_id != second.report_id


def test_finding_ids_are_unique_and_fresh_per_run():
    coordinator, _, _ = _coordinator(single_module_snapshot("p"))

    first = coordinator.run_analysis("p")
    second = coordinator.run_analysis("p")

    first_ids = {f.finding_id for f in first.findings}
    second_ids = {f.finding_id for f in second.findings}
    assert len(first_ids) == len(first.findings)
    assert not first_ids & second_ids
    assert [f.fingerprint for f in first.findings] == [
        f.fingerprint for f in second.findings
    ]


def test_unknown_battery_raises():
    coordinator, _, events = _coordinator()

    with pytest.raises(UnknownBatteryError):
        coordinator.run_analysis("p", battery="accessibility")

    assert events.events == []


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

def test_run_emits_lifecycle_events_in_order():
    coordinator, _, events = _coordinator(single_module_snapshot("p"))

    report = coordinator.run_analysis("p")

    types = [e.event_type for e in events.events]
    assert types[0] is GapEventType.ANALYSIS_STARTED
    assert types[-1] is GapEventType.ANALYSIS_COMPLETED
    assert set(types[1:-1]) == {GapEventType.RULE_EVALUATED}

    completed = events.of_type(GapEventType.ANALYSIS_COMPLETED)[0]
    assert completed.details["score"] == report.score
    assert completed.details["findings_count"] == len(report.findings)


def test_failed_run_emits_failure_and_keeps_previous_report():
    coordinator, source, events = _coordinator(single_module_snapshot("p"))
    previous = coordinator.run_analysis("p")
    events.clear()

    def broken(project_id):
        raise RuntimeError("outline service unavailable")

    source.get_outline = broken

    with pytest.raises(RuntimeError):
        coordinator.run_analysis("p")

    failed = events.of_type(GapEventType.ANALYSIS_FAILED)
    assert len(failed) == 1
    assert failed[0].details["exception_type"] == "RuntimeError"
    assert coordinator.get_report("p") is previous


def test_resolution_event_only_when_a_finding_changes():
    coordinator, _, events = _coordinator(single_module_snapshot("p"))
    report = coordinator.run_analysis("p")
    finding_id = report.findings[0].finding_id

    coordinator.resolve_finding("p", "gap-analysis", finding_id)
    coordinator.resolve_finding("p", "gap-analysis", finding_id)
    coordinator.resolve_finding("p", "gap-analysis", "GAP-INFO-unknown")

    resolved = events.of_type(GapEventType.FINDING_RESOLVED)
    assert [e.details["finding_id"] for e in resolved] == [finding_id]


# ---------------------------------------------------------------------------
# Views / teardown
# ---------------------------------------------------------------------------

def test_action_items_default_to_configured_limit():
    coordinator, _, _ = _coordinator(
        single_module_snapshot("p"), ACTION_ITEM_LIMIT=2
    )
    coordinator.run_analysis("p")

    items = coordinator.action_items("p")

    assert len(items.items) == 2
    assert all(f.severity is Severity.CRITICAL for f in items.items)
    assert items.remaining == items.total - 2


def test_views_are_none_without_report():
    coordinator, _, _ = _coordinator()

    assert coordinator.action_items("p") is None
    assert coordinator.grouped_findings("p") is None
    assert coordinator.summary_findings("p") is None


def _twin_module_snapshot(project_id):
    snapshot = single_module_snapshot(project_id)
    module = snapshot.outline.modules[0].model_copy(update={"description": ""})
    outline = snapshot.outline.model_copy(
        update={
            "modules": [module, module.model_copy(update={"id": "m2"})],
        }
    )
    return snapshot.model_copy(update={"outline": outline})


def test_summary_findings_collapse_repeated_messages():
    coordinator, _, _ = _coordinator(_twin_module_snapshot("p"))
    report = coordinator.run_analysis("p")

    summary = coordinator.summary_findings("p")

    descriptions = [f.description for f in summary]
    assert len(descriptions) == len(set(descriptions))
    assert len(summary) < len(report.findings)
    assert descriptions.count('Module "Intro" has no description.') == 1
    order = [f.finding_id for f in report.findings]
    ids = [f.finding_id for f in summary]
    assert ids == sorted(ids, key=order.index)


def test_summary_findings_skip_resolved():
    coordinator, _, _ = _coordinator(single_module_snapshot("p"))
    report = coordinator.run_analysis("p")
    target = report.findings[0].finding_id

    coordinator.resolve_finding("p", "gap-analysis", target)

    summary = coordinator.summary_findings("p")
    assert summary
    assert target not in [f.finding_id for f in summary]
    assert not any(f.resolved for f in summary)


def test_events_can_be_read_per_project():
    coordinator, source, events = _coordinator(single_module_snapshot("p"))
    source_with(complete_snapshot("q"), source)

    coordinator.run_analysis("p")
    coordinator.run_analysis("q")

    assert {e.project_id for e in events.for_project("q")} == {"q"}
    assert len(events.for_project("p")) + len(events.for_project("q")) == len(
        events.events
    )


def test_discard_project_drops_reports_and_data():
    coordinator, source, events = _coordinator(single_module_snapshot("p"))
    coordinator.run_analysis("p")

    coordinator.discard_project("p")

    assert coordinator.get_report("p") is None
    assert source.has_project("p") is False
    discarded = events.of_type(GapEventType.PROJECT_DISCARDED)
    assert discarded[0].details == {"reports_removed": 1}
