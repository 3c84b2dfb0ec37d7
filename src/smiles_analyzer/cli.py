"""
Command-line interface.

Usage:
    smiles-analyzer analyze "CC(=O)Oc1ccccc1C(=O)O" --logp 1.2 --crosscheck
    smiles-analyzer batch molecules.csv --column SMILES --csv results.csv
    smiles-analyzer batch molecules.txt --db results.db --table analysis
    smiles-analyzer samples
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .batch import BatchSummary, analyze_batch
from .config import (
    AnalyzerConfig,
    DEFAULT_ANALYZER_CONFIG,
    MACROCYCLE_CONFIG,
    SINGLE_COMPONENT_CONFIG,
    STRICT_LIPINSKI_CONFIG,
)
from .core import analyze_smiles
from .result import AnalysisResult
from .samples import SAMPLE_MOLECULES

logger = logging.getLogger(__name__)

PRESETS = {
    "default": DEFAULT_ANALYZER_CONFIG,
    "strict": STRICT_LIPINSKI_CONFIG,
    "single-component": SINGLE_COMPONENT_CONFIG,
    "macrocycle": MACROCYCLE_CONFIG,
}


def format_result(result: AnalysisResult) -> str:
    """Human-readable multi-line summary of one result."""
    if not result.is_valid:
        return f"{result.smiles}\n  INVALID [{result.reason_code}] {result.reason}"

    lip = result.lipinski
    logp_state = "unknown" if lip.logp is None else ("pass" if lip.logp else "fail")
    lines = [
        result.smiles,
        f"  Formula:            {result.formula}",
        f"  Molecular weight:   {result.molecular_weight} Da",
        f"  Atoms / bonds:      {result.atom_count} / {result.bond_count}",
        f"  Rings (aromatic):   {result.ring_count} ({result.aromatic_ring_count})",
        f"  Heteroatoms:        {result.heteroatom_count}",
        f"  Rotatable bonds:    {result.rotatable_bond_count}",
        f"  HBD / HBA:          {result.hbd_count} / {result.hba_count}",
        "  Lipinski:           "
        f"MW {'pass' if lip.mw else 'fail'}, logP {logp_state}, "
        f"HBD {'pass' if lip.hbd else 'fail'}, HBA {'pass' if lip.hba else 'fail'}",
        f"  Violations:         {lip.violations} ({'drug-like' if lip.drug_like else 'not drug-like'})",
    ]
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="smiles-analyzer",
        description="Structural descriptors and Lipinski evaluation from SMILES",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    p.add_argument("--preset", choices=sorted(PRESETS), default="default")
    sub = p.add_subparsers(dest="command", required=True)

    one = sub.add_parser("analyze", help="analyse a single SMILES")
    one.add_argument("smiles")
    one.add_argument("--logp", type=float, default=None, help="externally computed logP")
    one.add_argument("--json", action="store_true", help="print the flat record as JSON")
    one.add_argument("--crosscheck", action="store_true", help="compare with RDKit")

    many = sub.add_parser("batch", help="analyse a file of SMILES (.csv or one per line)")
    many.add_argument("input")
    many.add_argument("--column", default="SMILES", help="SMILES column for CSV input")
    many.add_argument("--logp-column", default=None, help="logP column for CSV input")
    many.add_argument("--workers", type=int, default=None)
    many.add_argument("--csv", dest="csv_out", default=None, help="write results to CSV")
    many.add_argument("--db", dest="db_out", default=None, help="write results to SQLite")
    many.add_argument("--table", default="analysis")

    sub.add_parser("samples", help="analyse the built-in example molecules")
    return p


def _run_analyze(args, config: AnalyzerConfig) -> int:
    result = analyze_smiles(args.smiles, config, args.logp)
    if args.json:
        print(json.dumps(result.to_record(), ensure_ascii=False))
    else:
        print(format_result(result))

    if args.crosscheck:
        from .crosscheck import crosscheck_with_rdkit

        report = crosscheck_with_rdkit(args.smiles, result)
        if report.agrees:
            print("RDKit cross-check: agrees")
        else:
            print(f"RDKit cross-check: rdkit_valid={report.rdkit_valid}")
            for name, (ours, theirs) in report.mismatches.items():
                print(f"  {name}: analyzer={ours} rdkit={theirs}")
    return 0 if result.is_valid else 1


def _run_batch(args, config: AnalyzerConfig) -> int:
    from .storage import read_smiles_file, write_results_csv, write_results_sqlite

    smiles, logps = read_smiles_file(args.input, args.column, args.logp_column)
    total = len(smiles)

    done = 0

    def progress(index: int, result: AnalysisResult) -> None:
        nonlocal done
        done += 1
        logger.debug("[%d/%d] %s", done, total, result.smiles)

    results = analyze_batch(smiles, config, logps, max_workers=args.workers, on_result=progress)

    for result in results:
        if not result.is_valid:
            print(f"invalid: {result.smiles} [{result.reason_code}] {result.reason}", file=sys.stderr)

    if args.csv_out:
        path = write_results_csv(results, args.csv_out)
        print(f"Wrote {len(results)} rows to {path}")
    if args.db_out:
        count = write_results_sqlite(results, args.db_out, args.table)
        print(f"Wrote {len(results)} rows to {args.db_out} (table: {args.table}, total rows: {count})")

    print(BatchSummary.from_results(results).describe())
    return 0


def _run_samples(config: AnalyzerConfig) -> int:
    for name, smiles in SAMPLE_MOLECULES:
        print(f"== {name}")
        print(format_result(analyze_smiles(smiles, config)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = PRESETS[args.preset]

    if args.command == "analyze":
        return _run_analyze(args, config)
    if args.command == "batch":
        return _run_batch(args, config)
    return _run_samples(config)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
