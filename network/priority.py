from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from network.model import InterfaceKind, InterfaceSelection
from logger import log

PRIORITY_CHOICES: Tuple[int, ...] = (100, 200, 300)

CONFLICT_MESSAGE = "Priority value already selected for another network type."


@dataclass(frozen=True)
class Accepted:
    kind: InterfaceKind
    value: int
    assignments: Dict[InterfaceKind, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Conflict:
    kind: InterfaceKind
    value: int
    held_by: InterfaceKind

    @property
    def message(self) -> str:
        return f"{CONFLICT_MESSAGE} ({self.value} is used by {self.held_by.label})"


AssignResult = Union[Accepted, Conflict]


def assign(
    kind: InterfaceKind,
    candidate: int,
    current: Mapping[InterfaceKind, int],
) -> AssignResult:
    """
    Check `candidate` against the values held by the other interface kinds.
    `current` is left untouched; an Accepted result carries the updated copy.
    Reassigning a kind's own value overwrites it.
    """
    for other, value in current.items():
        if other is not kind and value == candidate:
            log.warning(
                "Priority %s for %s rejected: held by %s",
                candidate, kind.value, other.value,
            )
            return Conflict(kind=kind, value=candidate, held_by=other)
    updated = dict(current)
    updated[kind] = candidate
    return Accepted(kind=kind, value=candidate, assignments=updated)


def find_conflicts(
    selections: Iterable[InterfaceSelection],
) -> List[Tuple[InterfaceKind, int, InterfaceKind]]:
    """Return (kind, value, other_kind) for every enabled pair sharing a priority."""
    holders: Dict[int, List[InterfaceKind]] = {}
    for sel in selections:
        if sel.enabled and sel.priority is not None:
            holders.setdefault(sel.priority, []).append(sel.kind)

    conflicts = []
    for value, kinds in holders.items():
        for kind in kinds:
            conflicts.extend((kind, value, other) for other in kinds if other is not kind)
    return conflicts


class PriorityRegistry:
    """Priority values picked so far in one form session."""

    def __init__(self) -> None:
        self._assignments: Dict[InterfaceKind, int] = {}

    @property
    def assignments(self) -> Dict[InterfaceKind, int]:
        return dict(self._assignments)

    def get(self, kind: InterfaceKind) -> Optional[int]:
        return self._assignments.get(kind)

    def assign(self, kind: InterfaceKind, value: int) -> AssignResult:
        result = assign(kind, value, self._assignments)
        if isinstance(result, Accepted):
            self._assignments = dict(result.assignments)
            log.debug("Priority %s assigned to %s", value, kind.value)
        return result

    def release(self, kind: InterfaceKind) -> None:
        if self._assignments.pop(kind, None) is not None:
            log.debug("Priority released for %s", kind.value)
