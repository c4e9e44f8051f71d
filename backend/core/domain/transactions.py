"""
core.domain.transactions — Helpers for safe state transitions.

Provides utilities that wrap ``transaction.atomic`` and
``select_for_update`` into reusable patterns so that every app's
service layer follows the same concurrency-safe approach: writers of
the same aggregate row are serialised, writers of different rows
proceed independently.

Usage::

    from django.db import transaction
    from core.domain.transactions import lock_for_update

    with transaction.atomic():
        call = lock_for_update(DispatchCall, call_id)
        ...

    # Several rows of one model, locked in a deterministic order:
    units = lock_many_for_update(Unit, [unit_a, unit_b])
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from django.db import models, transaction

from core.domain.exceptions import NotFound

M = TypeVar("M", bound=models.Model)


def lock_for_update(model_class: type[M], pk: Any) -> M:
    """
    Acquire a row-level lock on the given model instance.

    Convenience wrapper around ``select_for_update().get(pk=pk)``
    that must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row with that PK exists.
    """
    try:
        return model_class.objects.select_for_update().get(pk=pk)
    except model_class.DoesNotExist:
        raise NotFound(
            f"{model_class._meta.verbose_name} '{pk}' does not exist."
        )


def lock_many_for_update(model_class: type[M], pks: Iterable[Any]) -> dict[Any, M]:
    """
    Lock several rows of one model, always in primary-key order.

    Acquiring locks in a fixed order keeps two writers that touch the
    same pair of rows from deadlocking each other.

    Returns:
        A ``{pk: instance}`` mapping.

    Raises:
        NotFound: If any of the requested rows is missing.
    """
    wanted = sorted({pk for pk in pks if pk is not None})
    rows = {
        obj.pk: obj
        for obj in model_class.objects.select_for_update()
        .filter(pk__in=wanted)
        .order_by("pk")
    }
    missing = [pk for pk in wanted if pk not in rows]
    if missing:
        raise NotFound(
            f"{model_class._meta.verbose_name} '{missing[0]}' does not exist."
        )
    return rows
