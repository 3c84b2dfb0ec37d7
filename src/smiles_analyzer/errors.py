# src/smiles_analyzer/errors.py
"""
Exception types raised by the analyzer pipeline.

Every error carries a machine-readable ``reason_code`` so that
``analyze_smiles`` can fold it into an invalid ``AnalysisResult``.
"""

from typing import Optional, List


class AnalyzerError(Exception):
    """Base error"""

    reason_code = "analyzer_error"

    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)


class SmilesSyntaxError(AnalyzerError):
    """The SMILES string cannot be tokenized"""

    reason_code = "syntax_error"


class StructureError(AnalyzerError):
    """Tokens are well formed but the molecular graph is not"""

    reason_code = "structure_error"


class UnsupportedFeatureError(AnalyzerError):
    """Valid SMILES extension that the analyzer does not handle"""

    reason_code = "unsupported_feature"


class BatchCancelledError(AnalyzerError):
    """
    Raised by ``analyze_batch`` when the cancel event stops the batch.

    ``results`` holds, in input order, the results that finished before
    cancellation; entries that never started are ``None``.
    """

    reason_code = "cancelled"

    def __init__(self, results: List):
        self.results = results
        done = sum(1 for r in results if r is not None)
        super().__init__(f"batch cancelled after {done}/{len(results)} items")
