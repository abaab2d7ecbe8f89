"""Tests for CLI."""

import jwt
import pytest
from click.testing import CliRunner

from todolist_service.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "todolist-service" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_token(self, runner):
        secret = "cli-test-secret-with-thirty-two-bytes"
        result = runner.invoke(cli, [
            "token", "--name", "Alice", "--oid", "alice",
            "--scope", "ToDo.Read", "--scope", "ToDo.Write",
            "--secret", secret,
        ])
        assert result.exit_code == 0
        claims = jwt.decode(result.output.strip(), secret, algorithms=["HS256"])
        assert claims["scp"] == "ToDo.Read ToDo.Write"
        assert claims["oid"] == "alice"

    def test_policies(self, runner):
        result = runner.invoke(cli, ["policies"])
        assert result.exit_code == 0
        assert "Policy Summary" in result.output
        assert "ToDo.Write" in result.output

    def test_policies_from_file(self, runner, tmp_path):
        path = tmp_path / "p.yaml"
        path.write_text("policies:\n  - name: ToDo.Admin\n    roles: [Admin]\n")
        result = runner.invoke(cli, ["policies", "--file", str(path)])
        assert result.exit_code == 0
        assert "Loaded 1 policies" in result.output
        assert "ToDo.Admin" in result.output

    def test_demo(self, runner):
        result = runner.invoke(cli, ["demo"])
        assert result.exit_code == 0
        assert "Demo complete" in result.output
        assert "unauthorized" in result.output

    def test_demo_strict(self, runner):
        result = runner.invoke(cli, ["demo", "--strict-ownership"])
        assert result.exit_code == 0
        assert "Demo complete" in result.output
