"""Diffing of a submitted collection against persisted rows.

Recipe updates send the complete desired state of each nested collection. The
helpers here work out which persisted rows to delete, which to update and which
submitted items to insert, leaving the actual writes to the caller.
"""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

E = TypeVar("E")
D = TypeVar("D")
K = TypeVar("K", bound=Hashable)


@dataclass
class ReconcilePlan(Generic[E, D]):
    """Outcome of :func:`reconcile`.

    Attributes:
        to_delete: Persisted items absent from the submission.
        to_update: ``(persisted, submitted)`` pairs sharing a key.
        to_insert: Submitted items that have to become new rows.
        missing: Submitted keys that match no persisted item.
    """

    to_delete: list[E] = field(default_factory=list)
    to_update: list[tuple[E, D]] = field(default_factory=list)
    to_insert: list[D] = field(default_factory=list)
    missing: list[Hashable] = field(default_factory=list)

    @property
    def has_missing(self) -> bool:
        return bool(self.missing)


def reconcile(
    existing: Iterable[E],
    desired: Iterable[D],
    existing_key: Callable[[E], K],
    desired_key: Callable[[D], K | None],
    insert_unmatched: bool = False,
) -> ReconcilePlan[E, D]:
    """Compare persisted items with the submitted ones by key.

    A submitted item whose key is ``None`` is always new. A submitted key that matches
    no persisted item is reported in ``missing``, or treated as new when
    ``insert_unmatched`` is set (useful for link rows, where the key is the id of the
    linked entity rather than of the row itself). When several submitted items share a
    key only the first one counts.

    Args:
        existing: Rows currently stored.
        desired: Items submitted by the client, in order.
        existing_key: Extracts the key of a stored row.
        desired_key: Extracts the key of a submitted item, ``None`` for new items.
        insert_unmatched: Insert instead of reporting unknown submitted keys.

    Returns:
        ReconcilePlan: What to delete, update and insert.
    """
    stored = {existing_key(item): item for item in existing}
    plan: ReconcilePlan[E, D] = ReconcilePlan()
    seen: set[Hashable] = set()

    for item in desired:
        key = desired_key(item)
        if key is None:
            plan.to_insert.append(item)
            continue
        if key in seen:
            continue
        seen.add(key)
        if key in stored:
            plan.to_update.append((stored[key], item))
        elif insert_unmatched:
            plan.to_insert.append(item)
        else:
            plan.missing.append(key)

    plan.to_delete = [item for key, item in stored.items() if key not in seen]
    return plan
