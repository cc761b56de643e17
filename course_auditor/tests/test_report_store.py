from course_auditor.app.config import AuditorConfig, ResolutionPolicy
from course_auditor.app.coordinator.coordinator import GapAnalysisCoordinator
from course_auditor.app.schemas.report import GapReport
from course_auditor.app.store.report_store import ReportStore
from course_auditor.tests.fixtures.snapshot_factory import (
    single_module_snapshot,
    source_with,
)


BATTERY = "gap-analysis"


def _coordinator(policy=ResolutionPolicy.RESET):
    snapshot = single_module_snapshot(project_id="proj-1")
    config = AuditorConfig(RESOLUTION_POLICY=policy)
    return GapAnalysisCoordinator(config=config, source=source_with(snapshot))


# ---------------------------------------------------------------------------
# Replacement
# ---------------------------------------------------------------------------

def test_save_replaces_previous_report():
    store = ReportStore()
    first = GapReport(project_id="p", battery=BATTERY, score=10, summary="a")
    second = GapReport(project_id="p", battery=BATTERY, score=20, summary="b")

    store.save(first)
    store.save(second)

    assert store.get("p", BATTERY) is second


def test_reports_are_keyed_by_project_and_battery():
    store = ReportStore()
    store.save(GapReport(project_id="p", battery="a", score=1, summary="-"))
    store.save(GapReport(project_id="p", battery="b", score=2, summary="-"))
    store.save(GapReport(project_id="q", battery="a", score=3, summary="-"))

    assert store.batteries_for("p") == ["a", "b"]
    assert store.get("q", "a").score == 3
    assert store.get("q", "b") is None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def test_resolve_marks_only_the_target_finding():
    coordinator = _coordinator()
    report = coordinator.run_analysis("proj-1")
    target = report.findings[0]

    coordinator.resolve_finding("proj-1", BATTERY, target.finding_id)

    stored = coordinator.get_report("proj-1")
    assert stored.find(target.finding_id).resolved is True
    assert [f.resolved for f in stored.findings[1:]] == [False] * (
        len(stored.findings) - 1
    )
    assert stored.score == report.score


def test_resolve_is_idempotent():
    store = ReportStore()
    coordinator = GapAnalysisCoordinator(
        config=AuditorConfig(),
        source=source_with(single_module_snapshot(project_id="proj-1")),
        store=store,
    )
    report = coordinator.run_analysis("proj-1")
    finding_id = report.findings[0].finding_id

    assert store.resolve("proj-1", BATTERY, finding_id) is True
    assert store.resolve("proj-1", BATTERY, finding_id) is False
    assert store.get("proj-1", BATTERY).find(finding_id).resolved is True


def test_resolve_unknown_finding_is_silent_noop():
    coordinator = _coordinator()
    report = coordinator.run_analysis("proj-1")

    coordinator.resolve_finding("proj-1", BATTERY, "GAP-CRITICAL-missing")

    assert coordinator.get_report("proj-1") is report


def test_resolve_without_report_is_silent_noop():
    store = ReportStore()

    assert store.resolve("nope", BATTERY, "GAP-INFO-x") is False


def test_stale_finding_id_from_previous_run_is_noop():
    coordinator = _coordinator()
    old = coordinator.run_analysis("proj-1")
    coordinator.run_analysis("proj-1")

    coordinator.resolve_finding("proj-1", BATTERY, old.findings[0].finding_id)

    assert not any(f.resolved for f in coordinator.get_report("proj-1").findings)


# ---------------------------------------------------------------------------
# Resolution policy on re-run
# ---------------------------------------------------------------------------

def test_reset_policy_clears_resolution_on_rerun():
    coordinator = _coordinator(ResolutionPolicy.RESET)
    report = coordinator.run_analysis("proj-1")
    for finding in report.findings:
        coordinator.resolve_finding("proj-1", BATTERY, finding.finding_id)

    rerun = coordinator.run_analysis("proj-1")

    assert len(rerun.findings) == len(report.findings)
    assert not any(f.resolved for f in rerun.findings)


def test_carry_forward_policy_keeps_resolution_for_persisting_gaps():
    coordinator = _coordinator(ResolutionPolicy.CARRY_FORWARD)
    report = coordinator.run_analysis("proj-1")
    target = report.findings[0]
    coordinator.resolve_finding("proj-1", BATTERY, target.finding_id)

    rerun = coordinator.run_analysis("proj-1")

    carried = [f for f in rerun.findings if f.fingerprint == target.fingerprint]
    assert len(carried) == 1
    assert carried[0].resolved is True
    assert carried[0].finding_id != target.finding_id
    assert sum(f.resolved for f in rerun.findings) == 1


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------

def test_discard_project_removes_all_its_reports():
    store = ReportStore()
    store.save(GapReport(project_id="p", battery="a", score=1, summary="-"))
    store.save(GapReport(project_id="p", battery="b", score=2, summary="-"))
    store.save(GapReport(project_id="q", battery="a", score=3, summary="-"))

    assert store.discard_project("p") == 2
    assert store.batteries_for("p") == []
    assert store.get("q", "a") is not None
