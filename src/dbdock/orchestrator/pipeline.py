# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Ordered sequence of step functions sharing one context object.

A module owns a :class:`Pipeline` and step modules register into it
with :meth:`Pipeline.step`, so adding a step never means editing a
list somewhere else.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Generic, NamedTuple, TypeVar, overload

logger = logging.getLogger(__name__)

_Ctx = TypeVar("_Ctx")

_StepFn = Callable[[_Ctx], None]

DEFAULT_ORDER = 500


class _Step(NamedTuple):
    order: int
    seq: int
    fn: Callable[..., None]


class Pipeline(Generic[_Ctx]):
    """Step functions run in ascending ``order``.

    Ties are broken by registration order, which is import order for
    steps spread over several modules.  Leave gaps between orders
    (multiples of 100) so a step can be slotted in later.

    The first step that raises ends the run.  Nothing done by earlier
    steps is undone.

    Example::

        provision = Pipeline[CreateContext]("create")

        @provision.step(order=-100)
        def pull_image(ctx: CreateContext) -> None: ...

        @provision.step
        def report(ctx: CreateContext) -> None: ...
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._registered: list[_Step] = []
        self._counter = itertools.count()

    @overload
    def step(self, fn: _StepFn[_Ctx]) -> _StepFn[_Ctx]: ...
    @overload
    def step(self, *, order: int) -> Callable[[_StepFn[_Ctx]], _StepFn[_Ctx]]: ...

    def step(
        self,
        fn: _StepFn[_Ctx] | None = None,
        *,
        order: int = DEFAULT_ORDER,
    ) -> _StepFn[_Ctx] | Callable[[_StepFn[_Ctx]], _StepFn[_Ctx]]:
        """Decorator adding a step; usable as ``@p.step`` or ``@p.step(order=N)``."""
        def register(f: _StepFn[_Ctx]) -> _StepFn[_Ctx]:
            self._registered.append(_Step(order, next(self._counter), f))
            return f

        return register if fn is None else register(fn)

    def _ordered(self) -> list[_Step]:
        return sorted(self._registered, key=lambda s: (s.order, s.seq))

    def steps(self) -> list[_StepFn[_Ctx]]:
        return [s.fn for s in self._ordered()]

    def run(self, ctx: _Ctx) -> None:
        for s in self._ordered():
            logger.debug("[%s] step %s (order %d)", self.name, s.fn.__name__, s.order)
            s.fn(ctx)

    def __len__(self) -> int:
        return len(self._registered)

    def __repr__(self) -> str:
        names = ", ".join(f"{s.fn.__name__}({s.order})" for s in self._ordered())
        return f"Pipeline({self.name!r}, [{names}])"
