from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from event_checkin.checkin.service import CheckinService
from event_checkin.core.enums import Checkpoint, CheckpointStatus
from event_checkin.core.exceptions import EventDayError, NotFoundError
from event_checkin.registrants.model import RegistrantDraft


@pytest.fixture
def registrant(repo):
    return repo.create(RegistrantDraft(manual_code="QWE123", name="A"))


def test_gate_toggle_twice_returns_to_original(repo, registrant, fixed_now):
    svc = CheckinService(repo)
    later = fixed_now + timedelta(minutes=5)

    first = svc.scan_by_id(registrant.registrant_id, "gate", now=fixed_now)
    assert first.registrant.gate_status == CheckpointStatus.IN
    assert first.registrant.last_gate_update == fixed_now
    assert first.message == "Gate scan successful"

    second = svc.scan_by_id(str(registrant.registrant_id), "gate", now=later)
    assert second.registrant.gate_status == CheckpointStatus.OUT
    assert second.registrant.last_gate_update == later
    assert second.registrant.washroom_status == CheckpointStatus.OUT


def test_manual_code_scan_shares_toggle_rules(repo, registrant, fixed_now):
    svc = CheckinService(repo)

    outcome = svc.scan_by_manual_code("qwe123", "washroom", now=fixed_now)

    assert outcome.checkpoint is Checkpoint.WASHROOM
    assert outcome.message == "Washroom scan successful"
    assert outcome.registrant.washroom_status == CheckpointStatus.IN
    assert outcome.time == fixed_now


@pytest.mark.parametrize("action", [None, "", "GATE", "door"])
def test_unknown_action_changes_nothing(repo, registrant, fixed_now, action):
    outcome = CheckinService(repo).scan_by_id(registrant.registrant_id, action, now=fixed_now)

    assert outcome.checkpoint is None
    assert outcome.message == "No checkpoint updated"
    assert outcome.registrant == registrant
    assert repo.get_by_id(registrant.registrant_id) == registrant


@pytest.mark.parametrize("registrant_id", [404, "404", "abc", "", None])
def test_unknown_id_is_not_found(repo, registrant, registrant_id):
    with pytest.raises(NotFoundError, match="User not found"):
        CheckinService(repo).scan_by_id(registrant_id, "gate")


@pytest.mark.parametrize("code", ["NOPE00", "", None])
def test_unknown_manual_code_is_not_found(repo, registrant, code):
    with pytest.raises(NotFoundError, match="Invalid manual code"):
        CheckinService(repo).scan_by_manual_code(code, "gate")


def test_event_day_uses_fixed_offset(repo, registrant):
    svc = CheckinService(repo, event_date=date(2026, 3, 1), utc_offset_minutes=330)

    # 18:30 UTC on Feb 28 is 00:00 on Mar 1 in IST.
    svc.scan_by_id(registrant.registrant_id, "gate", now=datetime(2026, 2, 28, 18, 30, tzinfo=timezone.utc))

    with pytest.raises(EventDayError, match="only on event day"):
        svc.scan_by_id(registrant.registrant_id, "gate", now=datetime(2026, 2, 28, 18, 29, tzinfo=timezone.utc))
    with pytest.raises(EventDayError):
        svc.scan_by_manual_code("QWE123", "gate", now=datetime(2026, 3, 1, 18, 30, tzinfo=timezone.utc))

    assert repo.get_by_id(registrant.registrant_id).gate_status == CheckpointStatus.IN


def test_event_day_check_is_off_by_default(repo, registrant):
    outcome = CheckinService(repo).scan_by_id(
        registrant.registrant_id, "gate", now=datetime(1999, 1, 1, tzinfo=timezone.utc)
    )
    assert outcome.registrant.gate_status == CheckpointStatus.IN
