"""
Registration of exporters and postprocessors by mime type.

Registries are plain objects owned by the caller rather than module level
state, so independent manifests never see each other's callbacks.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from ..resolver.protocols import Artifact, ExportCallback

logger = logging.getLogger(__name__)

Callback = Union[ExportCallback, Callable[[Artifact], Any]]

WILDCARD = "*/*"


@dataclass
class ExportRegistry:
    """Ordered mime type -> callbacks tables for exporters and postprocessors."""
    exporters: dict[str, list[Callback]] = field(default_factory=dict)
    postprocessors: dict[str, list[Callback]] = field(default_factory=dict)

    def register_exporter(self, mime_type: str, callback: Callback) -> Callback:
        _register(self.exporters, mime_type, callback)
        logger.debug("Registered exporter %r for %s", callback, mime_type)
        return callback

    def register_postprocessor(self, mime_type: str, callback: Callback) -> Callback:
        _register(self.postprocessors, mime_type, callback)
        logger.debug("Registered postprocessor %r for %s", callback, mime_type)
        return callback

    def unregister_exporter(self, mime_type: str, callback: Callback) -> None:
        _unregister(self.exporters, mime_type, callback)

    def unregister_postprocessor(self, mime_type: str, callback: Callback) -> None:
        _unregister(self.postprocessors, mime_type, callback)

    def exporters_for(self, mime_type: str) -> list[Callback]:
        return _lookup(self.exporters, mime_type)

    def postprocessors_for(self, mime_type: str) -> list[Callback]:
        return _lookup(self.postprocessors, mime_type)

    def callbacks_for(self, mime_type: str) -> list[Callback]:
        """Exporters followed by postprocessors, each in registration order."""
        return self.exporters_for(mime_type) + self.postprocessors_for(mime_type)

    def clear(self) -> None:
        self.exporters.clear()
        self.postprocessors.clear()


def _register(table: dict[str, list[Callback]], mime_type: str, callback: Callback) -> None:
    if not callable(callback) and not callable(getattr(callback, "process", None)):
        raise TypeError(f"Callback must be callable or define process(): {callback!r}")
    table.setdefault(mime_type, []).append(callback)


def _unregister(table: dict[str, list[Callback]], mime_type: str, callback: Callback) -> None:
    callbacks = table.get(mime_type, [])
    if callback in callbacks:
        callbacks.remove(callback)
    if not callbacks:
        table.pop(mime_type, None)


def _lookup(table: dict[str, list[Callback]], mime_type: str) -> list[Callback]:
    # exact match, then "type/*", then "*/*"
    keys = [mime_type]
    if "/" in mime_type:
        keys.append(mime_type.split("/", 1)[0] + "/*")
    keys.append(WILDCARD)

    out: list[Callback] = []
    for key in dict.fromkeys(keys):
        out.extend(table.get(key, []))
    return out
