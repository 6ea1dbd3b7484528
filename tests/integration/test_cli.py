import pytest
from typer.testing import CliRunner

from license_credits import cli
from license_credits.cli import app
from license_credits.exceptions import CatalogIOError

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep rich from wrapping output at the default 80 columns."""
    monkeypatch.setattr(cli.console, "width", 200)
    monkeypatch.setattr(cli.err_console, "width", 200)
    for name in ("CREDITS_DATABASE_URL", "CREDITS_FORMAT", "CREDITS_TEMPLATE", "CREDITS_OUTPUT_NAME"):
        monkeypatch.delenv(name, raising=False)


def test_gen_command(tmp_path, credits_path, dependencies_path):
    """Test the gen command on the sample catalog."""
    output_file = tmp_path / "credits.txt"

    result = runner.invoke(
        app,
        [
            "gen",
            "--deps",
            str(dependencies_path),
            "--database",
            str(credits_path),
            "--format",
            "txt",
            "--output",
            str(output_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Selected 6 credits for 6 dependencies" in result.output
    assert "Generated:" in result.output
    assert output_file.read_text(encoding="utf-8").splitlines()[:3] == [
        "Android Jetpack",
        "The Android Open Source Project",
        "Apache License, Version 2.0",
    ]


def test_gen_command_database_from_env(tmp_path, credits_path, dependencies_path):
    output_file = tmp_path / "out" / "credits.html"

    result = runner.invoke(
        app,
        ["gen", "--deps", str(dependencies_path), "--output", str(output_file)],
        env={"CREDITS_DATABASE_URL": str(credits_path)},
    )

    assert result.exit_code == 0, result.output
    assert "<h2>Exo Player</h2>" in output_file.read_text(encoding="utf-8")


def test_gen_command_without_database(dependencies_path):
    result = runner.invoke(app, ["gen", "--deps", str(dependencies_path)])

    assert result.exit_code == 1
    assert "Credit database is required" in result.output


def test_gen_command_template_syntax_error(tmp_path, credits_path, dependencies_path):
    """Test that a broken custom template is reported without a traceback."""
    template = tmp_path / "bad.html"
    template.write_text("{% for x in %}{% endfor %}", encoding="utf-8")
    output_file = tmp_path / "credits.html"

    result = runner.invoke(
        app,
        [
            "gen",
            "-d",
            str(credits_path),
            "-D",
            str(dependencies_path),
            "-t",
            str(template),
            "-o",
            str(output_file),
        ],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error:" in result.output
    assert "Invalid template" in result.output
    assert not output_file.exists()


def test_gen_command_invalid_catalog(tmp_path, write_catalog, dependencies_path):
    catalog = write_catalog(
        """
    <credit key="broken">
        <component>Broken</component>
        <ownerRef keyref="nobody" />
        <license>MIT</license>
    </credit>
"""
    )
    output_file = tmp_path / "credits.html"

    result = runner.invoke(
        app,
        ["gen", "--deps", str(dependencies_path), "--database", str(catalog), "--output", str(output_file)],
    )

    assert result.exit_code == 1
    assert "refers to undefined owner key nobody" in result.output
    assert not output_file.exists()


def test_gen_command_io_error(mocker, credits_path, dependencies_path):
    """Test that load failures are reported without a traceback."""
    mocker.patch(
        "license_credits.cli.load",
        side_effect=CatalogIOError("Failed to read credit catalog https://example.com/c.xml: boom"),
    )

    result = runner.invoke(
        app,
        ["gen", "--deps", str(dependencies_path), "--database", "https://example.com/c.xml"],
    )

    assert result.exit_code == 1
    assert "Failed to read credit catalog" in result.output


def test_check_command(credits_path):
    result = runner.invoke(app, ["check", "--database", str(credits_path)])

    assert result.exit_code == 0
    assert "Valid catalog: 7 credits, 7 artifacts, 2 referenced owners, 2 referenced licenses" in result.output


def test_check_command_duplicate_key(write_catalog):
    credit = '<credit key="dup"><component>C</component><owner>O</owner><license>L</license></credit>'
    catalog = write_catalog(credit + credit)

    result = runner.invoke(app, ["check", "--database", str(catalog)])

    assert result.exit_code == 1
    assert "Duplicate credit key dup" in result.output


def test_show_command(credits_path):
    result = runner.invoke(app, ["show", "--database", str(credits_path)])

    assert result.exit_code == 0
    assert "materialComponents" in result.output
    assert "com.google.android.exoplayer:exoplayer-ui" in result.output
    assert result.output.index("androidJetpack") < result.output.index("openJDK")


def test_lookup_command(credits_path):
    result = runner.invoke(
        app,
        ["lookup", "org.apache.commons:commons-lang3:3.12.0", "--database", str(credits_path)],
    )

    assert result.exit_code == 0
    assert "commonsLang" in result.output
    assert "Owner: Commons Lang Team" in result.output


def test_lookup_command_unknown(credits_path):
    result = runner.invoke(
        app,
        ["lookup", "com.squareup.okhttp3:okhttp", "--database", str(credits_path)],
    )

    assert result.exit_code == 1
    assert "No credit found for com.squareup.okhttp3:okhttp" in result.output


def test_lookup_command_bad_coordinate(credits_path):
    result = runner.invoke(app, ["lookup", "okhttp", "--database", str(credits_path)])

    assert result.exit_code == 1
    assert "Invalid artifact coordinate" in result.output
