import asyncio
import inspect
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

from .registry import Callback, ExportRegistry
from ..resolver.protocols import Artifact

logger = logging.getLogger(__name__)


def _callback_target(callback: Callback) -> Callable[[Artifact], Any]:
    process = getattr(callback, "process", None)
    if callable(process):
        return process
    return callback


def _callback_name(callback: Callback) -> str:
    return getattr(callback, "__qualname__", None) or type(callback).__qualname__


def _skips(callback: Callback, artifact: Artifact) -> bool:
    skip = getattr(callback, "skip", None)
    return callable(skip) and bool(skip(artifact))


def _default_workers() -> int:
    # Same bound ThreadPoolExecutor uses when max_workers is None
    return min(32, (os.cpu_count() or 1) + 4)


class ConcurrentDispatcher:
    """
    Runs the exporters and postprocessors registered for each artifact.

    In concurrent mode every (callback, artifact) pair is an independent task
    on a bounded worker pool; no ordering is guaranteed between tasks. In
    sequential mode callbacks run one at a time, artifact by artifact, in
    registration order. A failure stops tasks that have not started yet; the
    call returns only once every started task has finished, and the first
    failure is re-raised unchanged.
    """

    def __init__(self, concurrent: bool = True, max_workers: Optional[int] = None) -> None:
        self.concurrent = concurrent
        self.max_workers = max_workers

    def dispatch(
            self,
            artifacts: Iterable[Artifact],
            registry: ExportRegistry,
            concurrent: Optional[bool] = None
    ) -> None:
        """
        Blocking entry point; see :meth:`dispatch_async`.

        When called from a thread that is already running an event loop the
        dispatch runs on a helper thread with its own loop.
        """
        coro = self.dispatch_async(artifacts, registry, concurrent=concurrent)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return

        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="asset-dispatch") as executor:
            executor.submit(asyncio.run, coro).result()

    async def dispatch_async(
            self,
            artifacts: Iterable[Artifact],
            registry: ExportRegistry,
            concurrent: Optional[bool] = None
    ) -> None:
        """
        Run every registered callback for every artifact.

        :param artifacts: Artifacts whose callbacks should run.
        :param registry: Exporters and postprocessors keyed by mime type.
        :param concurrent: Overrides the dispatcher's default mode.
        :raises Exception: The first callback failure, unchanged.
        """
        concurrent = self.concurrent if concurrent is None else concurrent

        jobs: list[tuple[Callback, Artifact]] = []
        for artifact in artifacts:
            for callback in registry.callbacks_for(artifact.mime_type):
                if _skips(callback, artifact):
                    logger.debug("Callback %s skipped %s",
                                 _callback_name(callback), artifact.digest_path)
                    continue
                jobs.append((callback, artifact))

        if not jobs:
            return

        logger.debug("Dispatching %d callback task(s) (%s)",
                     len(jobs), "concurrent" if concurrent else "sequential")

        if not concurrent:
            for callback, artifact in jobs:
                result = _callback_target(callback)(artifact)
                if inspect.isawaitable(result):
                    await result
            return

        await self._run_concurrently(jobs)

    async def _run_concurrently(self, jobs: list[tuple[Callback, Artifact]]) -> None:
        loop = asyncio.get_running_loop()
        semaphore = asyncio.Semaphore(self.max_workers or _default_workers())
        failed = asyncio.Event()

        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="asset-export") as executor:

            async def __run(callback: Callback, artifact: Artifact):
                target = _callback_target(callback)
                async with semaphore:
                    # Tasks still queued on the pool when a failure lands never start
                    if failed.is_set():
                        logger.debug("Dropping %s for %s after failure",
                                     _callback_name(callback), artifact.digest_path)
                        return
                    logger.debug("Running %s for %s",
                                 _callback_name(callback), artifact.digest_path)
                    try:
                        if inspect.iscoroutinefunction(target):
                            await target(artifact)
                            return
                        result = await loop.run_in_executor(executor, target, artifact)
                        if inspect.isawaitable(result):
                            await result
                    except BaseException:
                        failed.set()
                        raise

            _ret = await asyncio.gather(
                *(__run(callback, artifact) for callback, artifact in jobs),
                return_exceptions=True
            )

        _exceptions = [_exc for _exc in _ret if isinstance(_exc, BaseException)]
        if not _exceptions:
            return

        for _exc in _exceptions[1:]:
            logger.error("Additional callback failure: %r", _exc)
        raise _exceptions[0]
