"""Tests for CLI command wiring."""

from typer.testing import CliRunner

from entitygen import __version__
from entitygen.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"entitygen {__version__}" in result.output


def test_generate_writes_entities(library_spec, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "out"

    result = runner.invoke(app, ["generate", str(library_spec), "--package", "com.example.library", "--output", str(out)])

    assert result.exit_code == 0, result.output
    assert (out / "com" / "example" / "library" / "Author.java").exists()
    assert "Generated 5 entities" in result.output
    assert "Error in Broken" in result.output


def test_generate_uses_config(library_spec, tmp_path, monkeypatch):
    (tmp_path / "entitygen.yaml").write_text(
        f"spec_file: {library_spec}\npackage_name: org.sample\noutput_dir: generated\n"
    )
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["generate"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "generated" / "org" / "sample" / "Book.java").exists()


def test_generate_missing_spec(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["generate", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_generate_requires_spec(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["generate"])

    assert result.exit_code == 1
    assert "SPEC_FILE is required" in result.output


def test_generate_only_broken_definitions_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    spec = tmp_path / "api.yaml"
    spec.write_text(
        """
components:
  schemas:
    Broken:
      x-persist: Entity
      allOf:
        - $ref: '#/components/schemas/Base'
"""
    )

    result = runner.invoke(app, ["generate", str(spec), "--output", str(tmp_path / "out")])

    assert result.exit_code == 1
    assert "Error in Broken" in result.output


def test_inspect_prints_descriptors(library_spec, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["inspect", str(library_spec), "-p", "com.example"])

    assert result.exit_code == 0, result.output
    assert "com.example.Author [Entity] extends BaseEntity table=authors" in result.output
    assert "  books: List<Book> [one-to-many]" in result.output
    assert "  author: Author [many-to-one]" in result.output
    assert "  isbn: String (not nullable, unique)" in result.output
    assert "unique(title, author_id)" in result.output
    assert "Relations: 2 inferred, 1 missing targets, 0 unmatched" in result.output
    assert "missing target: Author.awards -> Award" in result.output
    assert not list(tmp_path.iterdir())


def test_inspect_reports_structural_warnings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    spec = tmp_path / "api.yaml"
    spec.write_text(
        """
components:
  schemas:
    Item:
      x-persist: Entity
      required: [missing]
      properties:
        label:
          type: string
"""
    )

    result = runner.invoke(app, ["inspect", str(spec), "-p", "com.example"])

    assert result.exit_code == 0, result.output
    assert "Warning: Definition Item requires unknown property missing" in result.output
    assert "com.example.Item [Entity]" in result.output
