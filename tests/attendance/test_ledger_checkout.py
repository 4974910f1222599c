from __future__ import annotations

from datetime import date, timedelta

import pytest

from asistencia.attendance.service import AttendanceLedger
from asistencia.core.exceptions import (
    AlreadyCheckedOut,
    DuplicateSubmission,
    IdentityUnavailable,
    NotFound,
    ValidationError,
)


@pytest.fixture
def checked_in(ledger, fixed_now):
    return ledger.submit_check_in("Juan Pérez", "dev-1", now=fixed_now)


def test_checkout_sets_exit_time(ledger, store, checked_in, fixed_now):
    at_1730 = fixed_now.replace(hour=17, minute=30)

    rec = ledger.submit_check_out(checked_in.record_id, "dev-1", now=at_1730)

    assert rec.check_out_time == "17:30"
    assert rec.check_in_time == "09:00"
    assert rec.is_complete
    assert store.get_by_id(checked_in.record_id).check_out_time == "17:30"


def test_checkout_twice_keeps_first_exit_time(ledger, store, checked_in, fixed_now):
    ledger.submit_check_out(checked_in.record_id, "dev-1", now=fixed_now.replace(hour=17, minute=30))

    with pytest.raises(AlreadyCheckedOut):
        ledger.submit_check_out(checked_in.record_id, "dev-9", now=fixed_now.replace(hour=18, minute=45))

    assert store.get_by_id(checked_in.record_id).check_out_time == "17:30"


def test_concurrent_checkout_does_not_overwrite_terminal_value(ledger, store, checked_in, fixed_now):
    # The page was loaded while the record was open; someone else closes it
    # between the read and the write.
    stale = store.get_by_id(checked_in.record_id)
    store.update_checkout(record_id=checked_in.record_id, check_out_time="17:00", device_hint="dev-2")
    store.get_by_id = lambda record_id: stale

    with pytest.raises(AlreadyCheckedOut):
        ledger.submit_check_out(checked_in.record_id, "dev-3", now=fixed_now.replace(hour=17, minute=1))

    del store.get_by_id
    assert store.get_by_id(checked_in.record_id).check_out_time == "17:00"


def test_device_can_check_out_only_once_per_day(ledger, store, fixed_now):
    first = ledger.submit_check_in("Juan Pérez", "dev-1", now=fixed_now)
    second = ledger.submit_check_in("María Ruiz", "dev-2", now=fixed_now)
    ledger.submit_check_out(first.record_id, "dev-3", now=fixed_now.replace(hour=17))

    with pytest.raises(DuplicateSubmission):
        ledger.submit_check_out(second.record_id, "dev-3", now=fixed_now.replace(hour=17, minute=5))

    assert store.get_by_id(second.record_id).check_out_time is None


def test_checkout_rebinds_device_hint_by_default(ledger, store, checked_in, fixed_now):
    rec = ledger.submit_check_out(checked_in.record_id, "dev-7", now=fixed_now.replace(hour=17))

    assert rec.device_hint == "dev-7"
    assert store.get_by_id(checked_in.record_id).device_hint == "dev-7"


def test_checkout_keeps_device_hint_when_rebinding_disabled(store, fixed_now):
    ledger = AttendanceLedger(store, rebind_device_on_checkout=False)
    rec = ledger.submit_check_in("Juan Pérez", "dev-1", now=fixed_now)

    out = ledger.submit_check_out(rec.record_id, "dev-7", now=fixed_now.replace(hour=17))

    assert out.device_hint == "dev-1"
    assert out.checkout_device_hint == "dev-7"
    assert store.get_by_id(rec.record_id).device_hint == "dev-1"
    assert store.get_by_id(rec.record_id).checkout_device_hint == "dev-7"


def test_device_can_check_out_only_once_per_day_when_rebinding_disabled(store, fixed_now):
    ledger = AttendanceLedger(store, rebind_device_on_checkout=False)
    first = ledger.submit_check_in("Juan Pérez", "dev-1", now=fixed_now)
    second = ledger.submit_check_in("María Ruiz", "dev-2", now=fixed_now)
    ledger.submit_check_out(first.record_id, "dev-3", now=fixed_now.replace(hour=17))

    with pytest.raises(DuplicateSubmission):
        ledger.submit_check_out(second.record_id, "dev-3", now=fixed_now.replace(hour=17, minute=5))

    assert store.get_by_id(second.record_id).check_out_time is None
    assert store.get_by_id(first.record_id).device_hint == "dev-1"


def test_rebinding_onto_device_with_own_record_is_duplicate(ledger, store, fixed_now):
    mine = ledger.submit_check_in("Juan Pérez", "dev-1", now=fixed_now)
    other = ledger.submit_check_in("María Ruiz", "dev-2", now=fixed_now)

    with pytest.raises(DuplicateSubmission):
        ledger.submit_check_out(other.record_id, "dev-1", now=fixed_now.replace(hour=17))

    assert store.get_by_id(other.record_id).check_out_time is None
    assert store.get_by_id(mine.record_id).device_hint == "dev-1"


def test_checkout_unknown_record_is_not_found(ledger, fixed_now):
    with pytest.raises(NotFound):
        ledger.submit_check_out(404, "dev-1", now=fixed_now)


def test_checkout_of_previous_day_record_is_not_found(ledger, store, fixed_now):
    old = store.add(name="Juan Pérez", work_date=date(2024, 1, 9), check_in_time="09:00", device_hint="dev-1")

    with pytest.raises(NotFound):
        ledger.submit_check_out(old.record_id, "dev-1", now=fixed_now)

    assert store.get_by_id(old.record_id).check_out_time is None


def test_checkout_requires_device_hint(ledger, store, checked_in, fixed_now):
    calls_before = list(store.calls)

    with pytest.raises(IdentityUnavailable):
        ledger.submit_check_out(checked_in.record_id, None, now=fixed_now)

    assert store.calls == calls_before


@pytest.mark.parametrize("record_id", ["abc", None, 0, -3])
def test_checkout_rejects_malformed_record_id(ledger, fixed_now, record_id):
    with pytest.raises(ValidationError):
        ledger.submit_check_out(record_id, "dev-1", now=fixed_now)


def test_checkout_next_day_is_not_found(ledger, checked_in, fixed_now):
    with pytest.raises(NotFound):
        ledger.submit_check_out(checked_in.record_id, "dev-1", now=fixed_now + timedelta(days=1))


def test_returned_record_matches_store(ledger, store, checked_in, fixed_now):
    rec = ledger.submit_check_out(checked_in.record_id, "dev-1", now=fixed_now.replace(hour=17, minute=30))

    assert rec == store.get_by_id(checked_in.record_id)
