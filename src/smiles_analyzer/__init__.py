# src/smiles_analyzer/__init__.py

"""
smiles_analyzer

A deterministic toolkit for:
- SMILES tokenizing and molecular-graph construction
- SSSR ring perception and aromaticity
- Structural descriptors, Hill formula, molecular weight
- Lipinski Rule-of-Five evaluation, single and batch
"""

from .core import analyze_smiles, run_pipeline, is_valid_smiles
from .batch import analyze_batch, parse_smiles_lines, BatchSummary
from .result import AnalysisResult, LipinskiEvaluation
from .molecule import Atom, Bond, BondOrder, Molecule, Ring
from .errors import (
    AnalyzerError,
    SmilesSyntaxError,
    StructureError,
    UnsupportedFeatureError,
    BatchCancelledError,
)
from .config import (
    AnalyzerConfig,
    DEFAULT_ANALYZER_CONFIG,
    STRICT_LIPINSKI_CONFIG,
    SINGLE_COMPONENT_CONFIG,
    MACROCYCLE_CONFIG,
)
from .samples import SAMPLE_MOLECULES

__all__ = [
    "analyze_smiles",
    "run_pipeline",
    "is_valid_smiles",
    "analyze_batch",
    "parse_smiles_lines",
    "BatchSummary",
    "AnalysisResult",
    "LipinskiEvaluation",
    "Atom",
    "Bond",
    "BondOrder",
    "Molecule",
    "Ring",
    "AnalyzerError",
    "SmilesSyntaxError",
    "StructureError",
    "UnsupportedFeatureError",
    "BatchCancelledError",
    "AnalyzerConfig",
    "DEFAULT_ANALYZER_CONFIG",
    "STRICT_LIPINSKI_CONFIG",
    "SINGLE_COMPONENT_CONFIG",
    "MACROCYCLE_CONFIG",
    "SAMPLE_MOLECULES",
]

__version__ = "0.1.0"
