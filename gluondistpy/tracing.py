"""Tracing wrapper for gluon distributions.

:class:`TracingGluonDistribution` forwards every ``S2``/``S4``/``F`` call to the
distribution it wraps and records the arguments and the result. Each call is
forwarded first and recorded afterwards; a call that raises is recorded with
the exception name in place of the result before the exception propagates.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from gluondistpy.distribution import GluonDistribution


@dataclass(frozen=True)
class TraceRecord:
    """One traced call."""

    kind: str
    arguments: tuple[float, ...]
    result: float | None
    error: str | None = None

    def format(self) -> str:
        """Tab-separated line: kind, arguments, then the result or the error name."""
        columns = [self.kind] + [repr(float(a)) for a in self.arguments]
        columns.append(self.error if self.error is not None else repr(float(self.result)))
        return "\t".join(columns)


class TracingGluonDistribution(GluonDistribution):
    """Decorator recording every call made to a gluon distribution.

    Parameters
    ----------
    gdist:
        The distribution to wrap. The decorator takes ownership of it.
    sink:
        Optional open text stream or file path. Every record is written to it
        as one line (see :meth:`TraceRecord.format`). A path is opened in
        append mode and closed by :meth:`close`.

    Notes
    -----
    Results are returned unchanged. ``name()`` is forwarded without being
    recorded. The record list and the sink are not synchronized, so one
    decorator should be used from one thread.
    """

    def __init__(self, gdist: GluonDistribution, sink: TextIO | str | Path | None = None):
        super().__init__(gdist.satscale)
        self.gdist = gdist
        self.records: list[TraceRecord] = []
        self._owns_sink = isinstance(sink, (str, Path))
        self.sink = open(sink, "a") if self._owns_sink else sink

    def __record(self, kind: str, method, *arguments: float) -> float:
        try:
            result = method(*arguments)
        except Exception as exc:
            self.__append(TraceRecord(kind, arguments, None, type(exc).__name__))
            raise
        self.__append(TraceRecord(kind, arguments, result))
        return result

    def __append(self, record: TraceRecord) -> None:
        self.records.append(record)
        line = record.format()
        self.log.debug(line)
        if self.sink is not None:
            self.sink.write(line + "\n")

    def S2(self, r2: float, Y: float) -> float:
        return self.__record("S2", self.gdist.S2, r2, Y)

    def S4(self, r2: float, s2: float, t2: float, Y: float) -> float:
        return self.__record("S4", self.gdist.S4, r2, s2, t2, Y)

    def F(self, q2: float, Y: float) -> float:
        return self.__record("F", self.gdist.F, q2, Y)

    def name(self) -> str:
        return self.gdist.name()

    def close(self) -> None:
        if self._owns_sink and self.sink is not None:
            self.sink.close()
            self.sink = None
        elif self.sink is not None:
            self.sink.flush()

    def __enter__(self) -> "TracingGluonDistribution":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
