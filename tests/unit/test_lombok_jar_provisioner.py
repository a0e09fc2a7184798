"""
Tests for lombok.jar provisioning.

HTTP is served by httpx.MockTransport so no test touches the network.
"""

import asyncio
import sys
from pathlib import Path

import httpx
import pytest

from lombok_agent.infrastructure.lombok_jar import (
    LOMBOK_URL,
    JarWriteError,
    LombokJarProvisioner,
    ensure_lombok_jar,
    resolve_file_path,
)
from lombok_agent.infrastructure.lombok_jar import provisioner as provisioner_module

JAR_BYTES = b"PK\x03\x04fake-lombok-jar"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, status_code: int = 200, content: bytes = JAR_BYTES, error: Exception | None = None):
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if error is not None:
                raise error
            return httpx.Response(status_code, content=content)

        super().__init__(handler)


def _ensure(transport: httpx.MockTransport, target, download_disabled: bool = False):
    async def run():
        async with LombokJarProvisioner(transport=transport) as provisioner:
            return await provisioner.ensure(target, download_disabled=download_disabled)

    return asyncio.run(run())


class TestEnsure:
    def test_existing_jar_is_returned_without_network(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        jar.write_bytes(b"cached")
        transport = RecordingTransport()

        assert _ensure(transport, jar) == jar
        assert transport.requests == []
        assert jar.read_bytes() == b"cached"

    def test_existing_jar_is_returned_even_when_downloads_disabled(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        jar.write_bytes(b"cached")

        assert _ensure(RecordingTransport(), jar, download_disabled=True) == jar

    def test_downloads_missing_jar(self, tmp_path: Path):
        jar = tmp_path / "bin" / "jdtls" / "bin" / "lombok.jar"
        transport = RecordingTransport()

        assert _ensure(transport, jar) == jar
        assert jar.read_bytes() == JAR_BYTES
        assert len(transport.requests) == 1
        assert str(transport.requests[0].url) == LOMBOK_URL
        assert transport.requests[0].method == "GET"
        assert not (jar.parent / "lombok.jar.part").exists()

    def test_accepts_string_target(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"

        assert _ensure(RecordingTransport(), str(jar)) == jar

    def test_disabled_download_creates_nothing(self, tmp_path: Path):
        jar = tmp_path / "bin" / "jdtls" / "bin" / "lombok.jar"
        transport = RecordingTransport()

        assert _ensure(transport, jar, download_disabled=True) is None
        assert transport.requests == []
        assert not (tmp_path / "bin").exists()

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_non_success_status_is_unavailable(self, tmp_path: Path, status_code: int):
        jar = tmp_path / "lombok.jar"
        transport = RecordingTransport(status_code=status_code)

        assert _ensure(transport, jar) is None
        assert not jar.exists()
        assert len(transport.requests) == 1

    def test_connection_error_is_unavailable(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        transport = RecordingTransport(error=httpx.ConnectError("connection refused"))

        assert _ensure(transport, jar) is None
        assert not jar.exists()

    def test_timeout_is_unavailable_without_retry(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        transport = RecordingTransport(error=httpx.ReadTimeout("timed out"))

        assert _ensure(transport, jar) is None
        assert len(transport.requests) == 1

    def test_empty_body_is_unavailable(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"

        assert _ensure(RecordingTransport(content=b""), jar) is None
        assert not jar.exists()

    def test_write_failure_is_unavailable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        jar = tmp_path / "lombok.jar"

        def failing_write(self, data):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "write_bytes", failing_write)

        assert _ensure(RecordingTransport(), jar) is None
        assert not jar.exists()

    def test_silent_write_is_unavailable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        jar = tmp_path / "lombok.jar"
        monkeypatch.setattr(provisioner_module, "_write_atomically", lambda path, body: None)

        assert _ensure(RecordingTransport(), jar) is None

    def test_uncreatable_directory_is_unavailable(self, tmp_path: Path):
        blocker = tmp_path / "bin"
        blocker.write_text("not a directory", encoding="utf-8")
        jar = blocker / "jdtls" / "lombok.jar"
        transport = RecordingTransport()

        assert _ensure(transport, jar) is None
        assert transport.requests == []

    def test_returns_none_for_non_path_runtime_values(self):
        transport = RecordingTransport()

        assert _ensure(transport, {"path": "/tmp/lombok.jar"}) is None
        assert _ensure(transport, None) is None
        assert _ensure(transport, "") is None
        assert transport.requests == []

    def test_target_with_embedded_null_is_unavailable(self, tmp_path: Path):
        transport = RecordingTransport()

        assert _ensure(transport, str(tmp_path / "bad\x00dir" / "lombok.jar")) is None
        assert _ensure(transport, tmp_path / "lombok\x00.jar") is None
        assert _ensure(transport, "file:///tmp/bad%00dir/lombok.jar") is None
        assert transport.requests == []
        assert list(tmp_path.iterdir()) == []

    def test_custom_download_url(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        transport = RecordingTransport()

        async def run():
            async with LombokJarProvisioner(
                download_url="https://mirror.example.com/lombok.jar", transport=transport
            ) as provisioner:
                return await provisioner.ensure(jar)

        assert asyncio.run(run()) == jar
        assert str(transport.requests[0].url) == "https://mirror.example.com/lombok.jar"


class TestEnsureLombokJar:
    def test_accepts_file_urls(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"
        jar.write_bytes(b"jar")

        assert asyncio.run(ensure_lombok_jar(jar.as_uri(), env={})) == jar

    def test_honours_download_opt_out(self, tmp_path: Path):
        jar = tmp_path / "cache" / "lombok.jar"

        result = asyncio.run(ensure_lombok_jar(jar, env={"OPENCODE_DISABLE_LSP_DOWNLOAD": "true"}))

        assert result is None
        assert not (tmp_path / "cache").exists()


class TestResolveFilePath:
    def test_plain_string(self):
        assert resolve_file_path("/tmp/lombok.jar") == Path("/tmp/lombok.jar")

    def test_path_object(self, tmp_path: Path):
        assert resolve_file_path(tmp_path / "lombok.jar") == tmp_path / "lombok.jar"

    def test_file_url(self, tmp_path: Path):
        jar = tmp_path / "dir with space" / "lombok.jar"

        assert resolve_file_path(jar.as_uri()) == jar

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX path layout")
    def test_localhost_file_url(self):
        assert resolve_file_path("file://localhost/tmp/lombok.jar") == Path("/tmp/lombok.jar")

    def test_rejects_other_schemes_and_garbage(self):
        assert resolve_file_path("https://example.com/lombok.jar") is None
        assert resolve_file_path("file://remote-host/share/lombok.jar") is None
        assert resolve_file_path(42) is None
        assert resolve_file_path({"path": "/tmp/lombok.jar"}) is None
        assert resolve_file_path("") is None

    def test_rejects_embedded_null(self):
        assert resolve_file_path("/tmp/lombok\x00.jar") is None
        assert resolve_file_path(Path("/tmp/bad\x00dir") / "lombok.jar") is None
        assert resolve_file_path("file:///tmp/bad%00dir/lombok.jar") is None


class TestWriteAtomically:
    def test_writes_body_without_leaving_partial_file(self, tmp_path: Path):
        jar = tmp_path / "lombok.jar"

        provisioner_module._write_atomically(jar, JAR_BYTES)

        assert jar.read_bytes() == JAR_BYTES
        assert [p.name for p in tmp_path.iterdir()] == ["lombok.jar"]

    def test_malformed_path_raises_write_error(self, tmp_path: Path):
        with pytest.raises(JarWriteError):
            provisioner_module._write_atomically(tmp_path / "lombok\x00.jar", JAR_BYTES)
