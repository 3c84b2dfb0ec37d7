# src/smiles_analyzer/storage.py
"""
Tabular input/output for batch runs.

- read SMILES (and optionally logP) from a CSV column or a plain text file
- flatten AnalysisResult records into a pandas DataFrame
- write results to CSV or to a SQLite table with a typed schema
"""

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from .batch import parse_smiles_lines
from .result import AnalysisResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_smiles_file(
    path: PathLike,
    column: str = "SMILES",
    logp_column: Optional[str] = None,
) -> Tuple[List[str], Optional[List[Optional[float]]]]:
    """
    Load SMILES from ``path``.

    ``.csv`` files are read with pandas and ``column`` is used (plus
    ``logp_column`` if given); anything else is treated as one SMILES per
    line. Returns ``(smiles, logps)``; ``logps`` is None without a logP column.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"SMILES file not found: {path}")

    if path.suffix.lower() != ".csv":
        return parse_smiles_lines(path.read_text(encoding="utf-8")), None

    df = pd.read_csv(path, dtype=str)
    df.columns = [c.strip() for c in df.columns]

    required_columns = [column] + ([logp_column] if logp_column else [])
    missing_columns = [col for col in required_columns if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")

    df = df[df[column].notna()]
    smiles = [s.strip() for s in df[column]]

    logps = None
    if logp_column:
        values = pd.to_numeric(df[logp_column], errors="coerce")
        logps = [None if pd.isna(v) else float(v) for v in values]

    logger.info("loaded %d SMILES from %s", len(smiles), path)
    return smiles, logps


def results_to_dataframe(results: Sequence[AnalysisResult], start_id: int = 1) -> pd.DataFrame:
    """One row per result, in order, with an ``id`` column first."""
    df = pd.DataFrame([r.to_record() for r in results])
    df.insert(0, "id", range(start_id, start_id + len(df)))
    return df


def write_results_csv(results: Sequence[AnalysisResult], csv_file: PathLike) -> Path:
    csv_file = Path(csv_file)
    results_to_dataframe(results).to_csv(csv_file, index=False)
    logger.info("wrote %d rows to %s", len(results), csv_file)
    return csv_file


def df_sql_type(dtype) -> str:
    """Map pandas dtype to SQLite type."""
    if pd.api.types.is_bool_dtype(dtype):
        return "INTEGER"
    if pd.api.types.is_integer_dtype(dtype):
        return "INTEGER"
    if pd.api.types.is_float_dtype(dtype):
        return "REAL"
    return "TEXT"


def create_table_with_schema(conn: sqlite3.Connection, table: str, df: pd.DataFrame) -> None:
    """Create table with id INTEGER PRIMARY KEY and columns matching df (excluding id)."""
    cols_sql = []
    for col in df.columns:
        if col == "id":
            continue
        col_safe = col.replace('"', '""')
        cols_sql.append(f'"{col_safe}" {df_sql_type(df[col].dtype)}')

    create_sql = (
        f'CREATE TABLE IF NOT EXISTS "{table}" '
        f'("id" INTEGER PRIMARY KEY, {", ".join(cols_sql)});'
    )
    conn.execute(create_sql)
    conn.commit()


def write_results_sqlite(
    results: Sequence[AnalysisResult],
    db_file: PathLike,
    table: str = "analysis",
    replace: bool = True,
) -> int:
    """
    Store results in ``table`` of the SQLite database ``db_file``.

    With ``replace`` the table is dropped first; otherwise rows are appended
    and ids continue after the current maximum. Returns the table row count.
    """
    db_file = Path(db_file)
    table_safe = table.replace('"', '""')

    with sqlite3.connect(db_file) as conn:
        if replace:
            conn.execute(f'DROP TABLE IF EXISTS "{table_safe}"')
            start_id = 1
        else:
            start_id = _next_id(conn, table_safe)

        df = results_to_dataframe(results, start_id=start_id)
        create_table_with_schema(conn, table_safe, df)
        df.to_sql(table, conn, if_exists="append", index=False)

        count = conn.execute(f'SELECT COUNT(*) FROM "{table_safe}"').fetchone()[0]

    logger.info("wrote %d rows to %s (table: %s)", len(df), db_file, table)
    return count


def _next_id(conn: sqlite3.Connection, table: str) -> int:
    exists = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
    ).fetchone()
    if not exists:
        return 1
    current = conn.execute(f'SELECT MAX("id") FROM "{table}"').fetchone()[0]
    return (current or 0) + 1
