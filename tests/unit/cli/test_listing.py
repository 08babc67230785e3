"""Unit tests for ls command."""

from pathlib import Path

from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _listed(output: str) -> list[str]:
    """Names from ELN-numbered lines, in order."""
    names = []
    for line in output.splitlines():
        eln, _, name = line.strip().partition(" ")
        if eln.isdigit() and name:
            names.append(name.split(".")[0])
    return names


class TestLsCommand:
    """Tests for trash ls."""

    def test_empty(self, base_args: list[str]) -> None:
        """An empty trash is reported."""
        result = runner.invoke(app, [*base_args, "ls"])

        assert result.exit_code == 0
        assert "trash: No trashed files" in result.output

    def test_lists_with_elns(self, base_args: list[str], make_files) -> None:
        """Trashed names are listed in name order with ELNs."""
        files = make_files("beta", "alpha")
        runner.invoke(app, [*base_args, "put", *map(str, files)])

        result = runner.invoke(app, [*base_args, "ls"])

        assert result.exit_code == 0
        assert _listed(result.output) == ["alpha", "beta"]
        assert result.output.lstrip().startswith("1 alpha.")

    def test_list_alias(self, base_args: list[str], make_files) -> None:
        """The hidden list alias behaves like ls."""
        (target,) = make_files("alpha")
        runner.invoke(app, [*base_args, "put", str(target)])

        result = runner.invoke(app, [*base_args, "list"])

        assert _listed(result.output) == ["alpha"]

    def test_reverse(self, base_args: list[str], make_files) -> None:
        """-r inverts the order for one listing."""
        files = make_files("alpha", "beta")
        runner.invoke(app, [*base_args, "put", *map(str, files)])

        result = runner.invoke(app, [*base_args, "ls", "-r"])

        assert _listed(result.output) == ["beta", "alpha"]

    def test_sort_by_size(self, base_args: list[str], tmp_path: Path) -> None:
        """--sort orders by the given key without saving it."""
        small = tmp_path / "zsmall"
        small.write_text("x")
        large = tmp_path / "alarge"
        large.write_text("x" * 1000)
        runner.invoke(app, [*base_args, "put", str(small), str(large)])

        by_size = runner.invoke(app, [*base_args, "ls", "--sort", "size"])
        by_name = runner.invoke(app, [*base_args, "ls"])

        assert by_size.exit_code == 0, by_size.output
        assert set(_listed(by_size.output)) == {"zsmall", "alarge"}
        assert _listed(by_name.output) == ["alarge", "zsmall"]

    def test_invalid_sort_key(self, base_args: list[str]) -> None:
        """Unknown sort keys are rejected by option parsing."""
        result = runner.invoke(app, [*base_args, "ls", "--sort", "colour"])

        assert result.exit_code == 2
