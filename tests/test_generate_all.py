"""
Tests for the generate-all use case — discovery and per-resource subprocesses.

subprocess.run is mocked; no child interpreter is started.
"""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import resourcegen
from resourcegen.core.models.artifact import GenerateOptions
from resourcegen.core.use_cases.generate_all import build_command, generate_all

RUN = "resourcegen.core.use_cases.generate_all.subprocess.run"


def _add_schema(root: Path, name: str) -> None:
    (root / "src/schemas" / f"{name}.schema.ts").write_text(
        f"export const {name}Resource = defineResource({{ name: '{name}' }}, {{}})\n"
    )


def _completed(returncode: int):
    def run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, returncode)
    return run


class TestBuildCommand:
    def test_minimal(self):
        cmd = build_command("order", GenerateOptions())
        assert cmd == [sys.executable, "-m", "resourcegen.main", "generate", "order"]

    def test_flags_forwarded(self, tmp_path: Path):
        cfg = tmp_path / "codegen.yml"
        cmd = build_command(
            "order",
            GenerateOptions(force=True, only="form", skip_wiring=True),
            config_path=cfg,
            global_args=["--verbose"],
        )
        assert cmd[3:] == [
            "--config", str(cfg), "--verbose",
            "generate", "order", "--force", "--only", "form", "--skip-wiring",
        ]


class TestGenerateAll:
    def test_one_subprocess_per_resource(self, sample_project: Path):
        _add_schema(sample_project, "order")
        with patch(RUN, side_effect=_completed(0)) as run:
            report = generate_all(project_root=sample_project)

        assert report.ok
        assert report.resources == ["order", "widget"]
        assert report.succeeded == ["order", "widget"]
        assert run.call_count == 2

        cmd = run.call_args_list[0].args[0]
        assert cmd[-2:] == ["generate", "order"]
        kwargs = run.call_args_list[0].kwargs
        assert kwargs["cwd"] == str(sample_project)
        package_parent = str(Path(resourcegen.__file__).resolve().parent.parent)
        assert kwargs["env"]["PYTHONPATH"].split(os.pathsep)[0] == package_parent
        assert kwargs["env"]["RGEN_LOG_TAG"] == "order"

    def test_base_schema_not_generated(self, sample_project: Path):
        with patch(RUN, side_effect=_completed(0)) as run:
            report = generate_all(project_root=sample_project)
        assert report.resources == ["widget"]
        assert [c.args[0][-1] for c in run.call_args_list] == ["widget"]

    def test_failure_does_not_stop_batch(self, sample_project: Path, caplog):
        _add_schema(sample_project, "order")

        def run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1 if "order" in cmd else 0)

        with patch(RUN, side_effect=run):
            report = generate_all(project_root=sample_project)

        assert not report.ok
        assert report.succeeded == ["widget"]
        assert [f.resource for f in report.failures] == ["order"]
        assert report.failures[0].reason == "exit code 1"
        assert "Failed to generate order" in caplog.text
        assert report.to_dict()["failed"] == [{"resource": "order", "reason": "exit code 1"}]

    def test_child_cannot_start(self, sample_project: Path):
        with patch(RUN, side_effect=FileNotFoundError("no python")):
            report = generate_all(project_root=sample_project)
        assert [f.resource for f in report.failures] == ["widget"]
        assert "could not start" in report.failures[0].reason

    def test_no_schemas(self, tmp_path: Path):
        with patch(RUN) as run:
            report = generate_all(project_root=tmp_path)
        assert report.ok
        assert report.resources == []
        run.assert_not_called()

    def test_options_reach_children(self, sample_project: Path):
        with patch(RUN, side_effect=_completed(0)) as run:
            generate_all(GenerateOptions(force=True), project_root=sample_project)
        assert "--force" in run.call_args.args[0]
