"""Unit tests for del command."""

from pathlib import Path

from trashctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


def _trash(base_args: list[str], files: list[Path]) -> None:
    result = runner.invoke(app, [*base_args, "put", *map(str, files)])
    assert result.exit_code == 0, result.output


class TestDelCommand:
    """Tests for trash del."""

    def test_interactive_single(
        self, base_args: list[str], trash_root: Path, make_files
    ) -> None:
        """The selected ELN is erased and the session ends."""
        _trash(base_args, make_files("alpha", "beta"))

        result = runner.invoke(app, [*base_args, "del"], input="1\n")

        assert result.exit_code == 0, result.output
        assert "Trashed files" in result.output
        assert "1 file(s) removed from the trash can" in result.output
        assert "1 total trashed file(s)" in result.output
        remaining = [p.name for p in (trash_root / "files").iterdir()]
        assert len(remaining) == 1
        assert remaining[0].startswith("beta.")

    def test_interactive_all(self, base_args: list[str], trash_root: Path, make_files) -> None:
        """'*' at the prompt erases everything."""
        _trash(base_args, make_files("alpha", "beta"))

        result = runner.invoke(app, [*base_args, "del"], input="*\n")

        assert result.exit_code == 0
        assert list((trash_root / "files").iterdir()) == []
        assert list((trash_root / "info").iterdir()) == []

    def test_interactive_quit(self, base_args: list[str], trash_root: Path, make_files) -> None:
        """'q' leaves the trash untouched."""
        _trash(base_args, make_files("alpha"))

        result = runner.invoke(app, [*base_args, "del"], input="q\n")

        assert result.exit_code == 0
        assert len(list((trash_root / "files").iterdir())) == 1

    def test_interactive_invalid_eln(self, base_args: list[str], make_files) -> None:
        """A malformed token is reported and nothing is erased."""
        _trash(base_args, make_files("alpha"))

        result = runner.invoke(app, [*base_args, "del"], input="1 oops\n")

        assert result.exit_code == 1
        assert "oops: Invalid ELN" in result.output

    def test_interactive_out_of_range(self, base_args: list[str], make_files) -> None:
        """Out-of-range ELNs are reported while valid ones are applied."""
        _trash(base_args, make_files("alpha"))

        result = runner.invoke(app, [*base_args, "del"], input="1 5\n")

        assert result.exit_code == 1
        assert "5: Invalid ELN" in result.output
        assert "1 file(s) removed from the trash can" in result.output

    def test_interactive_empty(self, base_args: list[str]) -> None:
        """An empty trash is reported without prompting."""
        result = runner.invoke(app, [*base_args, "del"])

        assert result.exit_code == 0
        assert "trash: No trashed files" in result.output

    def test_by_name(self, base_args: list[str], trash_root: Path, make_files) -> None:
        """Named items are erased."""
        _trash(base_args, make_files("alpha"))
        (name,) = [p.name for p in (trash_root / "files").iterdir()]

        result = runner.invoke(app, [*base_args, "del", name])

        assert result.exit_code == 0
        assert "1 file(s) removed from the trash can" in result.output
        assert not (trash_root / "info" / f"{name}.trashinfo").exists()

    def test_by_unknown_name(self, base_args: list[str]) -> None:
        """Unknown names fail with exit code 1."""
        result = runner.invoke(app, [*base_args, "del", "nothing"])

        assert result.exit_code == 1
        assert "nothing: Missing" in result.output

    def test_star_empties_trash(self, base_args: list[str], trash_root: Path, make_files) -> None:
        """'*' as an argument empties the trash."""
        _trash(base_args, make_files("alpha", "beta"))

        result = runner.invoke(app, [*base_args, "del", "*"])

        assert result.exit_code == 0
        assert "Trash can emptied" in result.output
        assert list((trash_root / "files").iterdir()) == []
