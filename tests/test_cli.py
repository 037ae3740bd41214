"""Tests for Suitcase CLI commands."""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from suitcase.cli import EXIT_BAD_USAGE, EXIT_STORE_ERROR, app


class TestCLI:
    """Test CLI commands."""

    @pytest.fixture
    def runner(self):
        """CLI runner fixture."""
        return CliRunner()

    @pytest.fixture
    def temp_project(self):
        """Create a temporary project for testing."""
        with tempfile.TemporaryDirectory() as temp_dir:
            project_path = Path(temp_dir)

            config_content = """
[store]
root_path = "data"
format = "json"
"""
            (project_path / "suitcase.toml").write_text(config_content)
            (project_path / "data").mkdir()

            yield project_path

    def invoke(self, runner, project, *args, **kwargs):
        return runner.invoke(app, [*args, "--path", str(project)], **kwargs)

    def test_init_command(self, runner, tmp_path):
        """Test suitcase init command."""
        result = runner.invoke(app, ["init", "--path", str(tmp_path)])

        assert result.exit_code == 0
        assert "Suitcase initialized" in result.output
        assert (tmp_path / "suitcase.toml").exists()
        assert (tmp_path / "data").is_dir()

    def test_init_existing_force(self, runner, temp_project):
        """Test init with existing files and force flag."""
        result = runner.invoke(app, ["init", "--path", str(temp_project)])
        assert result.exit_code == EXIT_BAD_USAGE
        assert "already initialized" in result.output

        result = runner.invoke(app, ["init", "--path", str(temp_project), "--force"])
        assert result.exit_code == 0

    def test_init_with_format(self, runner, tmp_path):
        """Test init with a non-default format."""
        result = runner.invoke(
            app, ["init", "--path", str(tmp_path), "--format", "yaml"]
        )
        assert result.exit_code == 0

        result = self.invoke(runner, tmp_path, "save", "users", "alice", '{"a": 1}')
        assert result.exit_code == 0
        assert (tmp_path / "data" / "users" / "alice.yml").exists()

    def test_missing_project(self, runner, tmp_path):
        """Test commands outside a Suitcase project."""
        result = self.invoke(runner, tmp_path, "read", "users", "alice")

        assert result.exit_code == EXIT_BAD_USAGE
        assert "project not found" in result.output

    def test_save_and_read(self, runner, temp_project):
        """Test suitcase save followed by suitcase read."""
        result = self.invoke(
            runner, temp_project, "save", "users", "alice", '{"name": "Alice"}'
        )

        assert result.exit_code == 0
        assert "Saved 'alice'" in result.output
        assert (temp_project / "data" / "users" / "alice.json").exists()

        result = self.invoke(runner, temp_project, "read", "users", "alice")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"name": "Alice"}

    def test_save_from_stdin(self, runner, temp_project):
        """Test reading item data from stdin."""
        result = self.invoke(
            runner, temp_project, "save", "users", "bob", "-", input='{"name": "Bob"}'
        )
        assert result.exit_code == 0

        result = self.invoke(runner, temp_project, "read", "users", "bob")
        assert json.loads(result.stdout) == {"name": "Bob"}

    def test_save_invalid_json(self, runner, temp_project):
        """Test that malformed item data is rejected."""
        result = self.invoke(runner, temp_project, "save", "users", "alice", "{nope")

        assert result.exit_code == EXIT_BAD_USAGE
        assert "Invalid JSON data" in result.output

    def test_read_missing_item(self, runner, temp_project):
        """Test reading an item that does not exist."""
        result = self.invoke(runner, temp_project, "read", "users", "ghost")

        assert result.exit_code == EXIT_STORE_ERROR
        assert "Failed to read item" in result.output

    def test_list_json_command(self, runner, temp_project):
        """Test suitcase list --json command."""
        self.invoke(runner, temp_project, "save", "users", "alice", '{"n": 1}')
        self.invoke(runner, temp_project, "save", "users", "bob", '{"n": 2}')

        result = self.invoke(runner, temp_project, "list", "users", "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"alice": {"n": 1}, "bob": {"n": 2}}

    def test_list_command(self, runner, temp_project):
        """Test suitcase list command."""
        self.invoke(runner, temp_project, "save", "users", "alice", '{"n": 1}')

        result = self.invoke(runner, temp_project, "list", "users")

        assert result.exit_code == 0
        assert "alice" in result.output
        assert "Total: 1 items" in result.output

    def test_delete_command(self, runner, temp_project):
        """Test suitcase delete command."""
        self.invoke(runner, temp_project, "save", "users", "alice", '{"n": 1}')

        result = self.invoke(runner, temp_project, "delete", "users", "alice")
        assert result.exit_code == 0
        assert not (temp_project / "data" / "users" / "alice.json").exists()

        result = self.invoke(runner, temp_project, "delete", "users", "alice")
        assert result.exit_code == EXIT_STORE_ERROR
        assert "Failed to delete item" in result.output

    def test_clear_command(self, runner, temp_project):
        """Test suitcase clear command."""
        self.invoke(runner, temp_project, "save", "users", "alice", '{"n": 1}')
        self.invoke(runner, temp_project, "save", "users", "bob", '{"n": 2}')

        result = self.invoke(runner, temp_project, "clear", "users")

        assert result.exit_code == 0
        assert (temp_project / "data" / "users").is_dir()
        assert list((temp_project / "data" / "users").iterdir()) == []

    def test_drop_command(self, runner, temp_project):
        """Test that drop protects non-empty collections unless forced."""
        self.invoke(runner, temp_project, "save", "users", "alice", '{"n": 1}')

        result = self.invoke(runner, temp_project, "drop", "users")
        assert result.exit_code == EXIT_STORE_ERROR
        assert "is not empty" in result.output
        assert (temp_project / "data" / "users" / "alice.json").exists()

        result = self.invoke(runner, temp_project, "drop", "users", "--force")
        assert result.exit_code == 0
        assert not (temp_project / "data" / "users").exists()

    def test_drop_missing_collection(self, runner, temp_project):
        """Test dropping a collection that does not exist."""
        result = self.invoke(runner, temp_project, "drop", "ghosts", "--force")

        assert result.exit_code == EXIT_STORE_ERROR
        assert "Failed to drop collection" in result.output
