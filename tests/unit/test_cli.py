"""Tests for the command line interface."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx
import pytest
import respx
import structlog
from typer.testing import CliRunner

from docbox_client import __version__
from docbox_client.cli import app
from docbox_client.config import Settings
from docbox_client.observability import LogLevel


if TYPE_CHECKING:
    from pathlib import Path


BASE_URL = "http://docbox.test"
STORAGE_URL = "https://storage.test/bucket/upload-key"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Point the CLI at the mocked server and record logging setup calls."""
    calls: list[dict[str, Any]] = []

    def record(**kwargs: Any) -> None:
        calls.append(kwargs)
        # Keep library log lines out of the command output
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        )

    monkeypatch.setattr("docbox_client.cli.configure_logging", record)
    monkeypatch.setattr(Settings, "CONFIG_SEARCH_PATHS", [])
    monkeypatch.setenv("DOCBOX_SERVER__URL", BASE_URL)
    monkeypatch.setenv("DOCBOX_POLLING__INTERVAL_SECONDS", "0.01")
    return calls


@pytest.fixture
def document(tmp_path: Path) -> Path:
    """A file to upload."""
    path = tmp_path / "report.pdf"
    path.write_bytes(b"hello world")
    return path


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self, runner: CliRunner) -> None:
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"docbox-client version {__version__}" in result.output

    def test_verbose_and_quiet_conflict(self, runner: CliRunner) -> None:
        """Test --verbose and --quiet cannot be combined."""
        result = runner.invoke(app, ["-V", "-q", "box", "tenant-a"])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test an explicit config path that does not exist."""
        missing = tmp_path / "nope.yaml"

        result = runner.invoke(app, ["--config", str(missing), "box", "tenant-a"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    @pytest.mark.parametrize(
        ("flags", "level"),
        [
            ([], LogLevel.INFO),
            (["--verbose"], LogLevel.DEBUG),
            (["--quiet"], LogLevel.WARNING),
        ],
    )
    def test_log_level_flags(
        self,
        runner: CliRunner,
        cli_environment: list[dict[str, Any]],
        box_json: dict[str, Any],
        flags: list[str],
        level: LogLevel,
    ) -> None:
        """Test verbosity flags select the log level."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a").mock(
                return_value=httpx.Response(200, json=box_json),
            )
            result = runner.invoke(app, [*flags, "box", "tenant-a"])

        assert result.exit_code == 0
        assert cli_environment[-1]["level"] == level


class TestBoxCommand:
    """Tests for the box command."""

    def test_show_box(self, runner: CliRunner, box_json: dict[str, Any]) -> None:
        """Test printing a document box."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a").mock(
                return_value=httpx.Response(200, json=box_json),
            )
            result = runner.invoke(app, ["box", "tenant-a"])

        assert result.exit_code == 0
        assert '"scope": "tenant-a"' in result.output

    def test_missing_box(self, runner: CliRunner) -> None:
        """Test a missing box exits with an error."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/ghost").mock(return_value=httpx.Response(404))
            result = runner.invoke(app, ["box", "ghost"])

        assert result.exit_code == 1
        assert "Error: document box not found" in result.output

    def test_create_missing_box(
        self,
        runner: CliRunner,
        box_json: dict[str, Any],
    ) -> None:
        """Test --create creates a missing box."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a").mock(return_value=httpx.Response(404))
            create = router.post("/box").mock(
                return_value=httpx.Response(
                    201,
                    json={
                        "document_box": box_json["document_box"],
                        "root": box_json["root"],
                    },
                ),
            )
            result = runner.invoke(app, ["box", "tenant-a", "--create"])

        assert result.exit_code == 0
        assert create.call_count == 1


class TestUploadCommand:
    """Tests for the upload command."""

    def test_presigned_upload(
        self,
        runner: CliRunner,
        document: Path,
        file_response_json: dict[str, Any],
    ) -> None:
        """Test the default presigned upload reports progress."""
        with respx.mock(base_url=BASE_URL) as router:
            router.post("/box/tenant-a/file/presigned").mock(
                return_value=httpx.Response(
                    201,
                    json={"task_id": "up-1", "method": "PUT", "uri": STORAGE_URL},
                ),
            )
            router.put(STORAGE_URL).mock(return_value=httpx.Response(200))
            router.get("/box/tenant-a/file/presigned/up-1").mock(
                return_value=httpx.Response(
                    200,
                    json={"status": "Complete", **file_response_json},
                ),
            )
            result = runner.invoke(
                app,
                ["upload", "tenant-a", "folder-root", str(document)],
            )

        assert result.exit_code == 0
        assert "Preparing" in result.output
        assert "Complete 100%" in result.output
        assert '"id": "file-1"' in result.output

    def test_tracked_upload(
        self,
        runner: CliRunner,
        document: Path,
        file_response_json: dict[str, Any],
    ) -> None:
        """Test --tracked uploads through the API."""
        with respx.mock(base_url=BASE_URL) as router:
            upload = router.post("/box/tenant-a/file").mock(
                return_value=httpx.Response(200, json={"task_id": "t-1"}),
            )
            router.get("/box/tenant-a/task/t-1").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "id": "t-1",
                        "document_box": "tenant-a",
                        "status": "Completed",
                        "output_data": file_response_json,
                    },
                ),
            )
            result = runner.invoke(
                app,
                ["upload", "tenant-a", "folder-root", str(document), "--tracked"],
            )

        assert result.exit_code == 0
        assert upload.call_count == 1
        assert '"id": "file-1"' in result.output

    def test_timeout_aborts(
        self,
        runner: CliRunner,
        document: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test --timeout fires the cancellation token."""
        monkeypatch.setenv("DOCBOX_POLLING__INTERVAL_SECONDS", "30")
        with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
            router.post("/box/tenant-a/file/presigned").mock(
                return_value=httpx.Response(
                    201,
                    json={"task_id": "up-1", "method": "PUT", "uri": STORAGE_URL},
                ),
            )
            router.put(STORAGE_URL).mock(return_value=httpx.Response(200))
            router.get("/box/tenant-a/file/presigned/up-1").mock(
                return_value=httpx.Response(200, json={"status": "Pending"}),
            )
            result = runner.invoke(
                app,
                [
                    "upload",
                    "tenant-a",
                    "folder-root",
                    str(document),
                    "--timeout",
                    "0.2",
                ],
            )

        assert result.exit_code == 1
        assert "aborted" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a nonexistent path is rejected before any request."""
        result = runner.invoke(
            app,
            ["upload", "tenant-a", "folder-root", str(tmp_path / "nope.pdf")],
        )

        assert result.exit_code != 0


class TestTaskCommand:
    """Tests for the task command."""

    def test_show_task(self, runner: CliRunner) -> None:
        """Test printing a task snapshot."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a/task/t-1").mock(
                return_value=httpx.Response(
                    200,
                    json={"id": "t-1", "document_box": "tenant-a", "status": "Pending"},
                ),
            )
            result = runner.invoke(app, ["task", "tenant-a", "t-1"])

        assert result.exit_code == 0
        assert '"status": "Pending"' in result.output

    def test_wait_prints_output(self, runner: CliRunner) -> None:
        """Test --wait prints the task output as JSON."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a/task/t-1").mock(
                side_effect=[
                    httpx.Response(
                        200,
                        json={
                            "id": "t-1",
                            "document_box": "tenant-a",
                            "status": "Pending",
                        },
                    ),
                    httpx.Response(
                        200,
                        json={
                            "id": "t-1",
                            "document_box": "tenant-a",
                            "status": "Completed",
                            "output_data": {"pages": 3},
                        },
                    ),
                ],
            )
            result = runner.invoke(app, ["task", "tenant-a", "t-1", "--wait"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"pages": 3}

    def test_failed_task(self, runner: CliRunner) -> None:
        """Test a failed task exits with its error."""
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/box/tenant-a/task/t-1").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "id": "t-1",
                        "document_box": "tenant-a",
                        "status": "Failed",
                        "output_data": {"error": "corrupt file"},
                    },
                ),
            )
            result = runner.invoke(app, ["task", "tenant-a", "t-1", "--wait"])

        assert result.exit_code == 1
        assert "Error: corrupt file" in result.output
