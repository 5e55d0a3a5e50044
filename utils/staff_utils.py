from typing import Dict, Iterable, List, Tuple

from core.models import StaffMember


def get_active_staff(staff: Iterable[StaffMember]) -> List[StaffMember]:
    """Drop inactive staff, keeping input order."""
    return [s for s in staff if s.is_active]


def get_roommates(staff: Iterable[StaffMember]) -> Dict[str, Tuple[str, ...]]:
    """
    Map each staff id to the ids of the other people sharing their room.
    Blank rooms are ignored.
    """
    by_room: Dict[str, List[str]] = {}
    for person in staff:
        room = (person.room or "").strip()
        if room:
            by_room.setdefault(room, []).append(person.id)

    roommates: Dict[str, Tuple[str, ...]] = {}
    for members in by_room.values():
        for sid in members:
            others = tuple(m for m in members if m != sid)
            if others:
                roommates[sid] = others
    return roommates
