# src/smiles_analyzer/config.py
from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Configuration object for SMILES -> descriptor analysis.

    Every field has an explicit chemical meaning; nothing is inferred.
    """

    # ========== Parsing ==========
    allow_fragments: bool = True   # "." separated components (salts, mixtures)

    # ========== Ring perception ==========
    max_ring_size: int = 12        # larger rings fall back to the spanning-tree basis

    # ========== Output ==========
    weight_precision: int = 1      # decimals kept on molecular weight

    # ========== Lipinski Rule of Five ==========
    mw_limit: float = 500.0
    logp_limit: float = 5.0
    hbd_limit: int = 5
    hba_limit: int = 10
    max_violations: int = 1        # drug-like when violations <= max_violations

    # ========== Batch ==========
    max_workers: int = 4

    def __post_init__(self):
        if self.max_ring_size < 3:
            raise ValueError(f"max_ring_size must be >= 3, got {self.max_ring_size}")
        if self.weight_precision < 0:
            raise ValueError(f"weight_precision must be >= 0, got {self.weight_precision}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


# ---------- Common presets ----------

DEFAULT_ANALYZER_CONFIG = AnalyzerConfig()
# Classic Rule of Five: one violation tolerated

STRICT_LIPINSKI_CONFIG = AnalyzerConfig(
    max_violations=0,
)

SINGLE_COMPONENT_CONFIG = AnalyzerConfig(
    allow_fragments=False,  # reject salts / mixtures such as "[Na+].[Cl-]"
)

MACROCYCLE_CONFIG = AnalyzerConfig(
    max_ring_size=24,  # macrolides, cyclic peptides
    max_workers=2,
)
