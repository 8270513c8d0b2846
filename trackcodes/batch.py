"""
batch.py

Bulk tracking-code generation with bounded concurrency.

Features:
  - input split into fixed-size chunks (10 by default)
  - each chunk runs concurrently and is awaited in full before the next
  - per-SKU fault isolation: a worker returns a BatchOutcome, never raises
  - thread-pool and asyncio front ends with the same semantics
  - no cancellation, no retries: failed SKUs are reported for re-submission
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import abc
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from trackcodes.exceptions import ContractViolation
from trackcodes.generator import TrackingCodeGenerator
from trackcodes.model.tracking import TrackingCodeSet

logger = logging.getLogger(__name__)

__all__ = [
    "BatchCoordinator",
    "BatchOutcome",
    "BatchReport",
    "DEFAULT_CHUNK_SIZE",
]

DEFAULT_CHUNK_SIZE = 10


@dataclass(frozen=True)
class BatchOutcome:
    """Result of one SKU: either ``codes`` or ``error`` is set."""

    sku: str
    codes: Optional[TrackingCodeSet] = None
    error: Optional[str] = None
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.codes is not None

    def unwrap(self) -> TrackingCodeSet:
        """Codes on success, an empty set on failure."""
        return self.codes if self.ok and self.codes is not None else TrackingCodeSet()


@dataclass
class BatchReport:
    outcomes: List[BatchOutcome] = field(default_factory=list)

    @property
    def results(self) -> Dict[str, TrackingCodeSet]:
        return {o.sku: o.unwrap() for o in self.outcomes}

    @property
    def failed_skus(self) -> List[str]:
        return [o.sku for o in self.outcomes if not o.ok]

    def summary(self) -> Dict[str, Any]:
        return {
            "skus": len(self.outcomes),
            "success": sum(1 for o in self.outcomes if o.ok),
            "error": len(self.failed_skus),
            "results": [
                {
                    "sku": o.sku,
                    "codes": o.unwrap().to_dict(),
                    "error": o.error,
                    "duration": o.duration,
                }
                for o in self.outcomes
            ],
        }


def _distinct_skus(skus: Iterable[str]) -> List[str]:
    if isinstance(skus, (str, bytes)) or not isinstance(skus, abc.Iterable):
        raise ContractViolation(
            f"SKUs must be a sequence of strings, got {type(skus).__name__}"
        )
    items = list(skus)
    for sku in items:
        if not isinstance(sku, str):
            raise ContractViolation(
                f"Every SKU must be a string, got {type(sku).__name__}"
            )
    # duplicates collapse to one entry, first occurrence keeps its position
    return list(dict.fromkeys(items))


class BatchCoordinator:
    """
    Args:
        generator: Per-SKU generator; TrackingCodeGenerator() by default.
        chunk_size: SKUs generated concurrently per wave.
        max_workers: Thread pool size (defaults to ``chunk_size``).
    """

    def __init__(
        self,
        generator: Optional[TrackingCodeGenerator] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_workers: Optional[int] = None,
    ) -> None:
        if not isinstance(chunk_size, int) or chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size!r}")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers!r}")
        self.generator = generator or TrackingCodeGenerator()
        self.chunk_size = chunk_size
        self.max_workers = max_workers or chunk_size

    def _run_one(self, sku: str) -> BatchOutcome:
        started = time.monotonic()
        try:
            codes = self.generator.generate_tracking_codes(sku)
        except Exception as ex:
            logger.error("Failed to generate codes for SKU %r: %s", sku, ex)
            return BatchOutcome(
                sku=sku,
                error=str(ex),
                duration=round(time.monotonic() - started, 4),
            )
        return BatchOutcome(
            sku=sku, codes=codes, duration=round(time.monotonic() - started, 4)
        )

    def _chunks(self, skus: List[str]) -> List[List[str]]:
        return [
            skus[i : i + self.chunk_size] for i in range(0, len(skus), self.chunk_size)
        ]

    def run(self, skus: Iterable[str]) -> BatchReport:
        """Generate codes for every distinct SKU, chunk by chunk."""
        distinct = _distinct_skus(skus)
        report = BatchReport()
        if not distinct:
            return report
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            for chunk in self._chunks(distinct):
                # map() yields only after each task of the chunk has finished
                report.outcomes.extend(pool.map(self._run_one, chunk))
        self._log_report(report)
        return report

    async def run_async(self, skus: Iterable[str]) -> BatchReport:
        """Same as ``run`` on the running event loop's default executor."""
        distinct = _distinct_skus(skus)
        report = BatchReport()
        loop = asyncio.get_running_loop()
        for chunk in self._chunks(distinct):
            outcomes = await asyncio.gather(
                *(loop.run_in_executor(None, self._run_one, sku) for sku in chunk)
            )
            report.outcomes.extend(outcomes)
        if report.outcomes:
            self._log_report(report)
        return report

    def generate_batch(self, skus: Iterable[str]) -> Dict[str, TrackingCodeSet]:
        """One entry per distinct SKU; failed SKUs map to an empty set."""
        return self.run(skus).results

    async def generate_batch_async(
        self, skus: Iterable[str]
    ) -> Dict[str, TrackingCodeSet]:
        return (await self.run_async(skus)).results

    @staticmethod
    def _log_report(report: BatchReport) -> None:
        failed = report.failed_skus
        logger.info(
            "Generated tracking codes for %d products (%d failed)",
            len(report.outcomes),
            len(failed),
        )
