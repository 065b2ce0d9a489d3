import asyncio
import logging
from concurrent.futures import Executor
from functools import partial
from pathlib import Path
from typing import Optional

from harvester.core.common.errors import classify_error
from harvester.features.row_validation.domain.rules import derive_date
from harvester.features.row_validation.service.validator import RowValidator

from ..data.directory_lister import LocalDirectoryLister
from ..domain.interfaces import IDirectoryLister
from ..domain.models import WalkSummary

logger = logging.getLogger(__name__)

DEFAULT_FILE_PATTERN = "CustomerData*.csv"

class PathWalker:
    """
    Recursive, concurrent tree walk.

    Every subdirectory and every matching file becomes its own task. Blocking
    filesystem work runs on the given executor, so the pool size bounds how
    much I/O happens at once. A directory's walk returns only after all tasks
    below it have finished.
    """

    def __init__(self,
                 validator: RowValidator,
                 executor: Executor,
                 lister: Optional[IDirectoryLister] = None,
                 file_pattern: str = DEFAULT_FILE_PATTERN):
        self.validator = validator
        self.executor = executor
        self.lister = lister or LocalDirectoryLister()
        self.file_pattern = file_pattern

    async def walk(self, path: Path) -> WalkSummary:
        """
        Walks the tree under `path`. Returns once every spawned task has joined.
        """
        root = Path(path)
        summary = WalkSummary()

        logger.info(f"Starting walk of: {root}")
        await self._walk_directory(root, root, summary)
        logger.info(
            f"Walk complete. Directories: {summary.directories_visited} "
            f"(failed {summary.directories_failed}), "
            f"files: {summary.files_processed}/{summary.files_found} (failed {summary.files_failed})"
        )
        return summary

    async def _walk_directory(self, path: Path, root: Path, summary: WalkSummary) -> None:
        # 1. List this level. A failure here only empties this subtree.
        try:
            listing = await self._run_blocking(self.lister.list, path, self.file_pattern)
        except OSError as e:
            kind = classify_error(e)
            error_msg = f"Cannot list directory {path} [{kind.value}]: {e}"
            logger.warning(error_msg)
            summary.directories_failed += 1
            summary.errors.append(error_msg)
            return

        summary.directories_visited += 1
        summary.files_found += len(listing.files)

        # 2. Date tag is computed once per directory and shared by its files
        date = derive_date(path, root) if listing.files else None

        # 3. Fan out and join
        async with asyncio.TaskGroup() as tg:
            for subdirectory in listing.subdirectories:
                tg.create_task(self._walk_directory(subdirectory, root, summary))
            for file_path in listing.files:
                tg.create_task(self._process_file(file_path, date, summary))

        logger.debug(f"Dir: {path}")

    async def _process_file(self, path: Path, date: str, summary: WalkSummary) -> None:
        logger.debug(f"Processing File: {path}")
        result = await self._run_blocking(self.validator.process_file, path, date)

        summary.files_processed += 1
        if not result.ok:
            summary.files_failed += 1
            summary.errors.append(f"Failed to process {path.name}: {result.error.value}")

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, partial(func, *args))
