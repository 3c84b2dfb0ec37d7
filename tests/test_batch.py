"""
test_batch.py - Batch analysis, ordering and cooperative cancellation
"""

import sys
import threading

import pytest

from smiles_analyzer import BatchCancelledError, analyze_batch, parse_smiles_lines
from smiles_analyzer.batch import BatchSummary

MIXED = ["CCO", "C1CC", "c1ccccc1", "CC(", "O", "CC(=O)OC1=CC=CC=C1C(=O)O"]


class CountdownEvent(threading.Event):
    """Reports "set" once ``is_set`` has been asked more than ``allowed`` times."""

    def __init__(self, allowed):
        super().__init__()
        self.allowed = allowed
        self.calls = 0
        self.lock = threading.Lock()

    def is_set(self):
        with self.lock:
            self.calls += 1
            return self.calls > self.allowed


def test_batch_preserves_order_and_flags_invalid():
    results = analyze_batch(MIXED, max_workers=3)
    assert len(results) == len(MIXED)
    assert [r.smiles for r in results] == MIXED
    assert [i for i, r in enumerate(results) if not r.is_valid] == [1, 3]
    assert results[5].formula == "C9H8O4"


def test_batch_matches_single_analysis():
    from smiles_analyzer import analyze_smiles

    assert analyze_batch(MIXED, max_workers=4) == [analyze_smiles(s) for s in MIXED]


def test_on_result_called_once_per_item():
    seen = []
    analyze_batch(MIXED, on_result=lambda i, r: seen.append((i, r.smiles)))
    assert sorted(seen) == sorted(enumerate(MIXED))


def test_logp_values_are_aligned():
    results = analyze_batch(["CCO", "CCCCCCCCCCCCCCCCCC"], logp_values=[-0.1, 8.2])
    assert results[0].lipinski.logp is True
    assert results[1].lipinski.logp is False

    with pytest.raises(ValueError):
        analyze_batch(["CCO", "CC"], logp_values=[1.0])


def test_empty_batch():
    assert analyze_batch([]) == []


def test_cancel_before_start():
    event = threading.Event()
    event.set()
    with pytest.raises(BatchCancelledError) as info:
        analyze_batch(MIXED, cancel_event=event)
    assert info.value.results == [None] * len(MIXED)
    assert info.value.reason_code == "cancelled"


def test_cancel_between_items():
    event = CountdownEvent(allowed=2)
    with pytest.raises(BatchCancelledError) as info:
        analyze_batch(MIXED, max_workers=1, cancel_event=event)
    partial = info.value.results
    assert len(partial) == len(MIXED)
    assert [r.smiles for r in partial[:2]] == MIXED[:2]
    assert partial[2:] == [None] * (len(MIXED) - 2)


def test_parse_smiles_lines():
    text = "CCO\n\n  c1ccccc1  \r\nO=C=O\n"
    assert parse_smiles_lines(text) == ["CCO", "c1ccccc1", "O=C=O"]


def test_batch_summary():
    summary = BatchSummary.from_results(analyze_batch(MIXED))
    assert (summary.total, summary.valid, summary.invalid) == (6, 4, 2)
    assert summary.drug_like == 4
    assert summary.describe() == "Analyzed 6 molecules, 4 valid"


if __name__ == "__main__":
    from console_runner import run_module

    sys.exit(run_module("Batch Analysis Test Script", globals()))
