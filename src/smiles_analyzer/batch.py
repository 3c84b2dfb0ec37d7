# src/smiles_analyzer/batch.py
"""
Batch analysis over many SMILES strings.

Items are independent, so they run on a bounded thread pool; results are
placed back by index so the output order always matches the input order.
Cancellation is cooperative: the event is checked before each molecule
starts, never in the middle of one.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .core import analyze_smiles
from .errors import BatchCancelledError
from .result import AnalysisResult

logger = logging.getLogger(__name__)

ResultCallback = Callable[[int, AnalysisResult], None]


@dataclass(frozen=True)
class BatchSummary:
    total: int
    valid: int
    invalid: int
    drug_like: int

    @classmethod
    def from_results(cls, results: Sequence[AnalysisResult]) -> "BatchSummary":
        valid = sum(1 for r in results if r.is_valid)
        drug_like = sum(1 for r in results if r.lipinski is not None and r.lipinski.drug_like)
        return cls(total=len(results), valid=valid, invalid=len(results) - valid, drug_like=drug_like)

    def describe(self) -> str:
        return f"Analyzed {self.total} molecules, {self.valid} valid"


def parse_smiles_lines(text: str) -> List[str]:
    """Split newline-delimited input; surrounding whitespace and blank lines are dropped."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def analyze_batch(
    smiles_list: Iterable[str],
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
    logp_values: Optional[Sequence[Optional[float]]] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    on_result: Optional[ResultCallback] = None,
) -> List[AnalysisResult]:
    """
    Analyse every SMILES independently and return one result per input,
    in input order. Invalid entries become ``is_valid=False`` results and
    never stop the batch.

    ``on_result(index, result)`` is called from the calling thread as each
    item completes (completion order, not input order).

    Raises BatchCancelledError if ``cancel_event`` prevented any item from
    starting; the exception carries the partial, index-aligned results.
    """
    items = list(smiles_list)
    if logp_values is None:
        logps: List[Optional[float]] = [None] * len(items)
    else:
        logps = list(logp_values)
        if len(logps) != len(items):
            raise ValueError(
                f"logp_values has {len(logps)} entries for {len(items)} SMILES"
            )

    results: List[Optional[AnalysisResult]] = [None] * len(items)
    if not items:
        return []

    def run_one(index: int):
        if cancel_event is not None and cancel_event.is_set():
            return index, None
        return index, analyze_smiles(items[index], config, logps[index])

    workers = max_workers or config.max_workers
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run_one, i) for i in range(len(items))]
        for future in as_completed(futures):
            index, result = future.result()
            if result is None:
                continue
            results[index] = result
            if on_result is not None:
                on_result(index, result)

    if any(r is None for r in results):
        logger.info("batch cancelled: %d/%d done", sum(r is not None for r in results), len(items))
        raise BatchCancelledError(results)

    summary = BatchSummary.from_results(results)
    logger.info(summary.describe())
    return results
