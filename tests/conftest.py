import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import SlotType, StaffMember  # noqa: E402


def _staff(sid, tier=1, **kwargs):
    kwargs.setdefault("name", sid.upper())
    kwargs.setdefault("quota_service", 10)
    kwargs.setdefault("weekend_limit", 10)
    for key in ("off_days", "requested_days"):
        if key in kwargs:
            kwargs[key] = frozenset(kwargs[key])
    return StaffMember(id=sid, tier=tier, **kwargs)


def _slot(sid, min_count=1, max_count=1, tiers=(1,), **kwargs):
    kwargs.setdefault("name", sid.title())
    for key in ("allowed_units", "priority_tiers"):
        if key in kwargs:
            kwargs[key] = frozenset(kwargs[key])
    return SlotType(
        id=sid,
        min_daily_count=min_count,
        max_daily_count=max_count,
        allowed_tiers=frozenset(tiers),
        **kwargs,
    )


@pytest.fixture
def make_staff():
    return _staff


@pytest.fixture
def make_slot():
    return _slot


@pytest.fixture
def clinical_team():
    staff = [
        _staff("a1", 1, group="Cardio", quota_service=4, quota_emergency=2, weekend_limit=3),
        _staff("a2", 1, group="Neuro", quota_service=4, quota_emergency=2, weekend_limit=3),
        _staff("b1", 2, group="Cardio", quota_service=5, quota_emergency=1, weekend_limit=3),
        _staff("b2", 2, group="Neuro", quota_service=5, quota_emergency=1, weekend_limit=3),
        _staff("b3", 2, group="Cardio", quota_service=5, quota_emergency=1, weekend_limit=3, off_days={10, 11, 12}),
        _staff("c1", 3, group="Neuro", quota_service=6, weekend_limit=3),
        _staff("c2", 3, group="Cardio", quota_service=6, weekend_limit=3, requested_days={3, 17}),
        _staff("c3", 3, group="Neuro", quota_service=6, weekend_limit=3),
        _staff("c4", 3, group="Neuro", quota_service=6, weekend_limit=3, is_active=False),
    ]
    slots = [
        _slot("ward", 1, 2, tiers=(1, 2, 3)),
        _slot("er", 1, 1, tiers=(1, 2), is_emergency=True, priority_tiers={2}),
    ]
    return staff, slots


@pytest.fixture
def nursing_team():
    staff = [
        _staff("s1", 1, unit="ICU", quota_service=8, weekend_limit=4),
        _staff("s2", 1, unit="ER", quota_service=8, weekend_limit=4),
        _staff("m1", 2, unit="ICU", quota_service=8, weekend_limit=4, room="R1"),
        _staff("m2", 2, unit="ER", quota_service=8, weekend_limit=4, room="R1"),
        _staff("m3", 2, unit="ICU", quota_service=8, weekend_limit=4, specialty="Endo"),
        _staff("j1", 3, unit="ER", quota_service=8, weekend_limit=4),
        _staff("j2", 3, unit="ICU", quota_service=8, weekend_limit=4),
        _staff("j3", 3, unit="ER", quota_service=8, weekend_limit=4, room="R2"),
        _staff("j4", 3, unit="ICU", quota_service=8, weekend_limit=4, room="R2"),
    ]
    slots = [_slot("general", 2, 3, tiers=())]
    return staff, slots
