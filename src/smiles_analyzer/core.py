import logging
from typing import Optional

from .builder import build_molecule
from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .errors import AnalyzerError
from .molecule import Molecule
from .properties import evaluate
from .result import AnalysisResult
from .rings import detect_rings
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def run_pipeline(
    smiles: str,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
) -> Molecule:
    """
    Tokenizer -> structure builder -> ring detector.

    Raises the first AnalyzerError met; no stage starts before the previous
    one has finished.
    """
    molecule = build_molecule(tokenize(smiles), smiles, config)
    return detect_rings(molecule, config)


def analyze_smiles(
    smiles: str,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
    logp: Optional[float] = None,
) -> AnalysisResult:
    """
    Main entry point: one SMILES string in, one AnalysisResult out.

    Bad input never raises; it yields ``is_valid=False`` with a reason code
    (syntax_error, structure_error, unsupported_feature, empty_input) and
    no numeric descriptors.
    """
    # ---------- 1. input ----------
    if not smiles or not smiles.strip():
        return AnalysisResult(
            smiles=smiles or "",
            is_valid=False,
            reason_code="empty_input",
            reason="SMILES is empty",
            logp=logp,
        )

    # ---------- 2. structure ----------
    try:
        molecule = run_pipeline(smiles, config)
    except AnalyzerError as e:
        logger.debug("rejected %r: %s", smiles, e)
        return AnalysisResult.invalid(smiles, e, logp)

    # ---------- 3. descriptors ----------
    return evaluate(molecule, logp, config)


def is_valid_smiles(smiles: str, config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG) -> bool:
    """Quick validity check without computing descriptors."""
    if not smiles:
        return False
    try:
        run_pipeline(smiles, config)
    except AnalyzerError:
        return False
    return True
