"""Tests for CLI functionality."""

import json
import subprocess
import sys
import zlib

import pytest


@pytest.fixture
def sources(tmp_path, make_jar, make_dir):
    """Create a jar and a source directory that both provide resources."""
    jar = make_jar(tmp_path / "lib.jar", {
        "cljs/core.cljs": "(ns cljs.core)",
        "cljs/string.cljs": "(ns cljs.string)",
        "deps.cljs": "{:foreign-libs []}",
    })
    src = make_dir(tmp_path / "src", {
        "my/app.cljs": "(ns my.app)",
        "deps.cljs": "{:externs []}",
    })
    return jar, src


def run_cli(*args, cwd=None):
    """Run the CLI and return the result."""
    cmd = [sys.executable, "-m", "sourcepath"] + [str(arg) for arg in args]
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=cwd,
    )
    return result


class TestCLI:
    """Test CLI commands."""

    def test_help(self):
        result = run_cli("--help")

        assert result.returncode == 0
        assert "resolve" in result.stdout
        assert "manifest" in result.stdout

    def test_no_command(self):
        result = run_cli()

        assert result.returncode == 1

    def test_paths(self, sources):
        jar, src = sources

        result = run_cli("paths", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        lines = result.stdout.splitlines()
        assert lines[0].split() == ["archive", str(jar)]
        assert lines[1].split() == ["directory", str(src)]

    def test_resolve_archive_entry(self, sources, entry_timestamp):
        jar, src = sources

        result = run_cli("resolve", "cljs/core.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data == {
            "type": "jar",
            "jar_path": str(jar),
            "src": "cljs/core.cljs",
            "date": entry_timestamp,
        }

    def test_resolve_file(self, sources):
        jar, src = sources

        result = run_cli("resolve", "my/app.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["type"] == "file"
        assert data["src"] == str(src / "my" / "app.cljs")

    def test_resolve_not_found(self, sources):
        jar, src = sources

        result = run_cli("resolve", "missing.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 1
        assert "Not found: missing.cljs" in result.stderr

    def test_read(self, sources):
        jar, src = sources

        result = run_cli("read", "cljs/string.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        assert result.stdout == "(ns cljs.string)"

    def test_read_search_stops_at_first_directory(self, sources):
        jar, src = sources

        result = run_cli("read", "cljs/string.cljs", "--search", "-p", src, "-p", jar, "--no-cwd")

        assert result.returncode == 1
        assert "Not found" in result.stderr

    def test_read_search(self, sources):
        jar, src = sources

        result = run_cli("read", "my/app.cljs", "--search", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        assert result.stdout == "(ns my.app)"

    def test_manifest(self, sources):
        jar, src = sources

        result = run_cli("manifest", "deps.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        assert "Found 2 manifest(s)" in result.stdout
        assert result.stdout.index("{:foreign-libs []}") < result.stdout.index("{:externs []}")

    def test_manifest_none(self, sources):
        jar, src = sources

        result = run_cli("manifest", "data_readers.cljs", "-p", jar, "-p", src, "--no-cwd")

        assert result.returncode == 0
        assert "No manifests found." in result.stdout

    def test_ls(self, sources):
        jar, _ = sources

        result = run_cli("ls", jar, "cljs/")

        assert result.returncode == 0
        assert result.stdout.splitlines() == ["cljs/core.cljs", "cljs/string.cljs"]

    def test_ls_bad_archive(self, tmp_path):
        bogus = tmp_path / "bogus.jar"
        bogus.write_text("not a zip")

        result = run_cli("ls", bogus)

        assert result.returncode == 1
        assert "Error:" in result.stderr

    def test_export(self, tmp_path):
        root = tmp_path / "embedded"
        (root / "cljs").mkdir(parents=True)
        (root / "cljs" / "core.cljs").write_bytes(zlib.compress(b"(ns cljs.core)"))
        outdir = tmp_path / "out"

        result = run_cli(
            "export", outdir, "--mode", "packaged", "--embedded-root", root, "--no-cwd"
        )

        assert result.returncode == 0
        assert "Exported 1 resource(s)" in result.stdout
        assert (outdir / "cljs" / "core.cljs").read_text() == "(ns cljs.core)"

    def test_export_in_development_mode(self, tmp_path):
        result = run_cli("export", tmp_path / "out", "--no-cwd")

        assert result.returncode == 0
        assert "No embedded resources to export." in result.stdout

    def test_config_file(self, sources, tmp_path):
        jar, src = sources
        config_file = tmp_path / "sourcepath.yaml"
        config_file.write_text(f"source_paths:\n  - {src}\n  - {jar}\nseed_cwd: false\n")

        result = run_cli("paths", "--config", config_file)

        assert result.returncode == 0
        assert [line.split()[1] for line in result.stdout.splitlines()] == [str(src), str(jar)]

    def test_invalid_config(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("classpath: [src]\n")

        result = run_cli("paths", "--config", config_file)

        assert result.returncode == 1
        assert "Error: Unknown config keys" in result.stderr
