"""Batch processing for multiple production files.

- fit_file: Parse, fit, select and forecast a single file
- BatchProcessor: Fit many files in parallel and save their outputs
"""

from .processor import BatchConfig, BatchProcessor, BatchResult, FileResult, fit_file

__all__ = [
    "BatchConfig",
    "BatchProcessor",
    "BatchResult",
    "FileResult",
    "fit_file",
]
