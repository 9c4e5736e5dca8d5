"""
Link graph expansion.

Walks the links declared by resolved artifacts so that compiling an asset
also publishes everything it links to.
"""
import logging
from typing import Iterable, Iterator, Optional

from .protocols import Artifact, Resolver
from ..errors import DoubleLinkError

logger = logging.getLogger(__name__)


class LinkExpander:
    """
    Computes the closure of artifacts reachable from requested logical paths.

    Artifacts are yielded depth-first, a parent before the artifacts it
    links. Each digest path is yielded at most once per expansion, so the
    same artifact linked through several paths is not an error. Within the
    closure of a single requested path, two *different* artifacts claiming
    the same output logical path raise DoubleLinkError.
    """

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver

    def expand(self, logical_paths: Iterable[str]) -> list[Artifact]:
        """
        Expand requested logical paths into an ordered list of artifacts.

        :param logical_paths: Requested logical paths.
        :return: Artifacts to publish, without duplicated digest paths.
        :raises NotFoundError: If a requested or linked path cannot be resolved.
        :raises DoubleLinkError: If linked artifacts collide on an output path.
        """
        return list(self.iter_expand(logical_paths))

    def iter_expand(self, logical_paths: Iterable[str]) -> Iterator[Artifact]:
        visited: set[str] = set()
        for path in logical_paths:
            yield from self._expand_one(path, visited)

    def _expand_one(self, path: str, visited: set[str]) -> Iterator[Artifact]:
        root = self._resolver.resolve(path)
        linked_paths: dict[str, str] = {root.logical_path: root.digest_path}
        stack: list[str] = list(root.links)

        if root.digest_path not in visited:
            visited.add(root.digest_path)
            yield root
        else:
            logger.debug("Already expanded: %s (%s)", path, root.digest_path)

        while stack:
            link = stack.pop(0)
            asset = self._resolver.resolve(link)

            previous: Optional[str] = linked_paths.get(asset.logical_path)
            if previous is not None and previous != asset.digest_path:
                raise DoubleLinkError(
                    parent=root.filename or root.logical_path,
                    logical_path=asset.logical_path,
                    first=previous,
                    second=asset.digest_path,
                )
            linked_paths[asset.logical_path] = asset.digest_path

            if asset.digest_path in visited:
                continue
            visited.add(asset.digest_path)

            logger.debug("Expanded link %s -> %s", root.logical_path, asset.digest_path)
            yield asset
            stack = list(asset.links) + stack
