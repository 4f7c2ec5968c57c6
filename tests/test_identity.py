from datetime import date

from agenda.core.priorities import Priority
from agenda.models.task_record import TaskRecord
from agenda.services.history import ScannedPartition
from agenda.services.identity import annotate, annotation_date, identity_of, resolve_identities


def _part(date_key, *records):
    return ScannedPartition(
        date_key=date_key,
        records=[
            TaskRecord(id=f"{date_key}-{i}", text=text, completed=done, date=date_key, priority=prio)
            for i, (text, done, prio) in enumerate(records)
        ],
    )


def test_identity_strips_origin_annotation():
    assert identity_of("Pay rent (📅 01/01)") == "Pay rent"
    assert identity_of("Pay rent") == "Pay rent"
    assert identity_of("  Pay rent  ") == "Pay rent"


def test_identity_cuts_everything_after_the_marker():
    assert identity_of("Pay rent (📅 01/01") == "Pay rent"
    assert identity_of("Plan (📅 trip) (📅 bookings)") == "Plan"
    assert identity_of("Pay rent (📅 01/01) urgent") == "Pay rent"


def test_identity_survives_annotation():
    for text in ("Call mum (📅 ask about sunday", "Plan (📅 trip) (📅 bookings)", "Pay rent"):
        base = identity_of(text)
        assert identity_of(annotate(base, "2024-01-01")) == base


def test_identity_ignores_plain_parentheses():
    assert identity_of("Call mum (evening)") == "Call mum (evening)"


def test_annotate_uses_day_then_month():
    assert annotate("Pay rent", "2024-03-07") == "Pay rent (📅 07/03)"
    assert identity_of(annotate("Pay rent", "2024-03-07")) == "Pay rent"


def test_annotation_date_resolves_against_current_year():
    assert annotation_date("Pay rent (📅 07/03)", today=date(2025, 1, 2)) == date(2025, 3, 7)
    assert annotation_date("Pay rent", today=date(2025, 1, 2)) is None
    assert annotation_date("Pay rent (📅 31/02)", today=date(2025, 1, 2)) is None


def test_origin_is_earliest_and_latest_is_most_recent():
    scan = [
        _part("2024-01-01", ("Pay rent", False, Priority.LOW)),
        _part("2024-01-02", ("Pay rent (📅 01/01)", False, Priority.LOW)),
        _part("2024-01-03", ("Pay rent (📅 01/01)", True, Priority.HIGH)),
    ]
    index = resolve_identities(scan)

    assert index.origin == {"Pay rent": "2024-01-01"}
    latest = index.latest["Pay rent"]
    assert latest.completed is True
    assert latest.priority == Priority.HIGH
    assert latest.source_date == "2024-01-03"


def test_resolution_does_not_depend_on_scan_order():
    parts = [
        _part("2024-01-03", ("Walk dog", True, Priority.NORMAL)),
        _part("2024-01-01", ("Walk dog", False, Priority.NORMAL)),
    ]
    index = resolve_identities(parts)
    assert index.origin["Walk dog"] == "2024-01-01"
    assert index.latest["Walk dog"].source_date == "2024-01-03"


def test_first_record_wins_inside_one_day():
    index = resolve_identities(
        [_part("2024-01-01", ("Walk dog", False, Priority.NORMAL), ("Walk dog (📅 01/01)", True, Priority.LOW))]
    )
    assert index.latest["Walk dog"].completed is False
