"""Collect traits and methods per type and attach them to documented records.

Methods may be declared in a different file than their owning struct, so
``impl`` blocks from every scanned file are registered first and dispatched
onto the records once the whole package is known.
"""

from __future__ import annotations

import typing as typ

from juledoc.models import AggregateMeta

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from juledoc.models import DocumentationRecord
    from juledoc.scanner import ImplBlock


class AggregateRegistry:
    """Accumulate :class:`AggregateMeta` keyed by owner type name."""

    def __init__(self) -> None:
        self._metas: dict[str, AggregateMeta] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._metas

    def get(self, name: str) -> AggregateMeta | None:
        """Return the metadata collected for ``name``, if any."""
        return self._metas.get(name)

    def register(self, impl: ImplBlock) -> None:
        """Merge one impl block's trait label and methods into its owner's meta."""
        meta = self._metas.setdefault(impl.owner, AggregateMeta())
        if impl.trait:
            meta.add_trait(impl.trait)
        meta.methods.extend(impl.methods)

    def register_all(self, impls: cabc.Iterable[ImplBlock]) -> None:
        """Register every block in ``impls`` in order."""
        for impl in impls:
            self.register(impl)

    def dispatch(self, records: cabc.Iterable[DocumentationRecord]) -> None:
        """Attach collected metadata to the first aggregate record of each name.

        Parameters
        ----------
        records : Iterable[DocumentationRecord]
            Records of the whole compilation unit. Only struct and strict
            type alias records receive metadata; later records sharing a name
            are left untouched.
        """
        attached: set[str] = set()
        for record in records:
            if not record.kind.is_aggregate or record.name in attached:
                continue
            meta = self._metas.get(record.name)
            if meta is None:
                continue
            record.meta = meta
            attached.add(record.name)


__all__ = ["AggregateRegistry"]
