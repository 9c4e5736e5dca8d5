import hashlib
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path, PurePosixPath

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from asset_manifest.errors import NotFoundError  # noqa: E402
from asset_manifest.resolver.protocols import Artifact  # noqa: E402

MIME_TYPES = {
    ".js": ("application/javascript", True),
    ".css": ("text/css", True),
    ".svg": ("image/svg+xml", True),
    ".ico": ("image/x-icon", True),
    ".png": ("image/png", False),
    ".gif": ("image/gif", False),
}


class FakeResolver:
    """In-memory resolver; digests depend on the source and the resolver version."""

    def __init__(self):
        self.version = "1.0"
        self.sources: dict[str, dict] = {}
        self.calls: list[str] = []

    def add(self, path, source, logical_path=None, links=(), filename=None):
        if isinstance(source, str):
            source = source.encode("utf-8")
        self.sources[path] = {
            "source": source,
            "logical_path": logical_path or path,
            "links": tuple(links),
            "filename": filename or f"/fixtures/{logical_path or path}",
        }

    def update(self, path, source):
        self.sources[path]["source"] = source.encode("utf-8") if isinstance(source, str) else source

    def digest_path(self, path):
        return self.resolve(path).digest_path

    def resolve(self, logical_path):
        self.calls.append(logical_path)
        spec = self.sources.get(logical_path)
        if spec is None:
            raise NotFoundError(logical_path)

        digest = hashlib.sha256(self.version.encode("utf-8") + spec["source"]).hexdigest()
        logical = PurePosixPath(spec["logical_path"])
        mime_type, compressible = MIME_TYPES.get(logical.suffix, ("application/octet-stream", False))
        return Artifact(
            logical_path=spec["logical_path"],
            digest_path=str(logical.with_name(f"{logical.stem}-{digest}{logical.suffix}")),
            source=spec["source"],
            digest=digest,
            mime_type=mime_type,
            compressible=compressible,
            links=spec["links"],
            filename=spec["filename"],
        )


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def resolver():
    """Resolver preloaded with a small set of assets."""
    r = FakeResolver()
    r.add("application.js", "var Application = {\n  name: 'app',\n  version: 1\n};\n" * 8)
    r.add("gallery.js", "var Gallery = {};\n")
    r.add("/fixtures/default/gallery.js", "var Gallery = {};\n", logical_path="gallery.js")
    r.add("gallery-link.js", "// link gallery.js\n", links=["gallery.js"])
    r.add("explore-link.js", "// link gallery-link.js\n", links=["gallery-link.js"])
    r.add("coffee/index.js", "var coffee = true;\n")
    r.add("coffee.js", "var coffee = true;\n", filename="/fixtures/coffee/index.js")
    r.add("alias-index-link.js", "// link coffee.js\n", links=["coffee.js"])
    r.add("gallery.css", ".gallery { color: red; }\n")
    r.add("logo.svg", "<svg xmlns='http://www.w3.org/2000/svg'></svg>\n")
    r.add("logo.png", b"\x89PNG\r\n\x1a\nlogo")
    r.add("troll.png", b"\x89PNG\r\n\x1a\ntroll")
    r.add("blank.gif", b"GIF89a\x01\x00\x01\x00")
    r.add("favicon.ico", b"\x00\x00\x01\x00icon")
    r.add("mobile/a.js", "var A;\n")
    r.add("mobile/b.js", "var B;\n")

    r.add("foo.js", "var foo;\n", filename="/fixtures/double/foo.js")
    r.add("/fixtures/double/foo.js", "var foo;\n", logical_path="foo.js",
          filename="/fixtures/double/foo.js")
    r.add("link_same_file_twice.js", "// link foo.js twice\n",
          links=["foo.js", "/fixtures/double/foo.js"])

    r.add("one/foo.js", "var one;\n", logical_path="foo.js", filename="/fixtures/double/one/foo.js")
    r.add("two/foo.js", "var two;\n", logical_path="foo.js", filename="/fixtures/double/two/foo.js")
    r.add("link_directory_manifest.js", "// link_directory one\n// link_directory two\n",
          links=["one/foo.js", "two/foo.js"])
    return r
