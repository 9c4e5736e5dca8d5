from .cached import CachedResolver
from .links import LinkExpander
from .protocols import Artifact, Resolver, ExportCallback, hexdigest_integrity_uri

__all__ = [
    "Artifact",
    "Resolver",
    "ExportCallback",
    "CachedResolver",
    "LinkExpander",
    "hexdigest_integrity_uri",
]
