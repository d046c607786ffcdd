"""Pipeline orchestration for building a module documentation book."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TypeVar

from .book import BookAssembler
from .config import ModbookConfig
from .evaluation import ModuleEvaluator, SyntheticContext
from .lib import Provider, load_provider
from .logging import get_logger
from .models import Book, BookConfig, ModuleRecord, RenderedDocument
from .module_list import read_module_list
from .options import build_option_tree, extract_options
from .render import ModuleRenderer
from .tree import TreeBuilder, relative_location

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class GenerationResult:
    """Outcome of a successful book build."""

    output_dir: Path
    modules: List[ModuleRecord]
    navigation: str


class BookGenerator:
    """Coordinates evaluation, tree building, rendering and assembly.

    Evaluation and rendering run on a thread pool. Tree building waits for
    every module, and the first failure aborts the run before anything is
    written to the output directory.
    """

    def __init__(
        self,
        provider: Provider | None = None,
        evaluator: ModuleEvaluator | None = None,
        renderer: ModuleRenderer | None = None,
        assembler: BookAssembler | None = None,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self._provider = provider
        self._evaluator = evaluator
        self._renderer = renderer
        self._assembler = assembler
        self._runner = runner
        self.logger = get_logger("orchestrator")

    def generate(self, config: ModbookConfig) -> GenerationResult:
        root = config.root.resolve()
        self.logger.info("Reading module list %s", config.module_list)
        paths = read_module_list(config.module_list)

        evaluator = self._evaluator or ModuleEvaluator(
            SyntheticContext.from_provider(self._provider or load_provider(config.provider))
        )
        records = self._map(
            lambda path: self.document_module(evaluator, path, root), paths, config.jobs
        )
        self.logger.info("Evaluated %d modules", len(records))

        tree = TreeBuilder(root_segments=config.root_segments, title=config.title).build(records)

        renderer = self._renderer or ModuleRenderer(
            show_examples=config.show_examples, include_hidden=config.include_hidden
        )
        documents: List[RenderedDocument] = self._map(renderer.render, tree.modules, config.jobs)
        documents.extend(renderer.render_category(node) for node in tree.categories)

        book = Book(
            navigation=tree.navigation,
            documents=documents,
            config=BookConfig(title=config.book_title),
        )
        assembler = self._assembler or BookAssembler(config.builder, runner=self._runner)
        output_dir = assembler.assemble(book, config.output_dir, build=config.build)
        self.logger.info("Book written to %s", output_dir)
        return GenerationResult(output_dir=output_dir, modules=records, navigation=tree.navigation)

    def document_module(self, evaluator: ModuleEvaluator, path: Path, root: Path) -> ModuleRecord:
        """Evaluate one module and extract its options."""
        relative_path = relative_location(path, root)
        evaluated = evaluator.evaluate(path)
        options = None
        if evaluated.raw_options is not None:
            options = extract_options(build_option_tree(evaluated.raw_options)) or None
        self.logger.debug(
            "Documented %s with %d options", relative_path, len(options) if options else 0
        )
        return ModuleRecord(
            path=path,
            source=evaluated.source,
            relative_path=relative_path,
            name=evaluated.name,
            doc_file=evaluated.doc_file,
            options=options,
        )

    @staticmethod
    def _map(func: Callable[[T], R], items: Iterable[T], jobs: Optional[int]) -> List[R]:
        pending = list(items)
        workers = jobs or os.cpu_count() or 1
        if workers <= 1 or len(pending) <= 1:
            return [func(item) for item in pending]

        executor = ThreadPoolExecutor(max_workers=min(workers, len(pending)))
        try:
            futures = [executor.submit(func, item) for item in pending]
            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
