"""
Multi-file extraction pipeline.

Runs each (path, source) pair through the extractor chosen by its file
extension, independently of the others, and merges the per-file results
into one DocumentModel. A fatal error in one file is recorded as a
FileFailure and never stops the rest of the batch.
"""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from todoc.builder import merge_file_documents
from todoc.errors import ExtractionError
from todoc.extractors import BaseExtractor, get_extractor, language_for_path
from todoc.models import (
    DEFAULT_CONFIG,
    DocumentModel,
    ExtractionConfig,
    FileDocument,
    FileFailure,
)

logger = logging.getLogger(__name__)


def extract_file(
    path: str,
    source: str | bytes,
    extractor: BaseExtractor,
    log: logging.Logger | None = None,
) -> FileDocument | FileFailure:
    """Run one file through an extractor, converting fatal errors to FileFailure.

    Args:
        path: Source file path.
        source: File contents.
        extractor: Extractor for the file's language.
        log: Logger for failure reports. Defaults to module logger.

    Returns:
        FileDocument on success, FileFailure when extraction aborted.

    Raises:
        No exceptions - ExtractionError becomes FileFailure.

    Example:
        >>> result = extract_file("bad.lua", "function f(", LuaExtractor())
        >>> result.code
        'unbalanced_block'
    """
    log = log or logger
    try:
        return extractor.extract(source, path)
    except ExtractionError as e:
        log.warning(f"Skipping {path}: {e}")
        return FileFailure(path=path, code=e.code, message=e.message, position=e.position)


def build_document_model(
    sources: Iterable[tuple[str, str | bytes]],
    config: ExtractionConfig | None = None,
    max_workers: int | None = None,
    log: logging.Logger | None = None,
) -> DocumentModel:
    """Extract documentation for a batch of files.

    Files are processed independently; with more than one worker they run
    on a thread pool. Results are sorted by path before merging, so the
    model is identical regardless of scheduling. Files whose extension maps
    to no extractor are logged and skipped.

    Args:
        sources: (path, source) pairs in any order.
        config: Extraction configuration. Defaults to DEFAULT_CONFIG.
        max_workers: Worker threads. Defaults to config.max_workers.
        log: Logger instance. Defaults to module logger.

    Returns:
        DocumentModel with files and failures ordered by path.

    Raises:
        No exceptions - per-file errors are collected as failures.

    Example:
        >>> model = build_document_model([("b.lua", code_b), ("a.lua", code_a)])
        >>> [f.path for f in model.files]
        ['a.lua', 'b.lua']
    """
    config = config or DEFAULT_CONFIG
    log = log or logger
    workers = max_workers if max_workers is not None else config.max_workers

    extractors: dict[str, BaseExtractor] = {}
    jobs: list[tuple[str, str | bytes, BaseExtractor]] = []
    for path, source in sources:
        language = language_for_path(path) or "lua"
        if language not in extractors:
            extractor = get_extractor(language, config, log)
            if extractor is None:
                log.warning(f"Not supported code file: {path} ({language})")
                continue
            extractors[language] = extractor
        jobs.append((path, source, extractors[language]))

    if workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda job: extract_file(*job, log=log), jobs))
    else:
        results = [extract_file(*job, log=log) for job in jobs]

    documents = [r for r in results if isinstance(r, FileDocument)]
    failures = [r for r in results if isinstance(r, FileFailure)]
    log.info(f"Extracted {len(documents)} file(s), {len(failures)} failed")
    return merge_file_documents(documents, failures)
