"""File writer for generated entity sources."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class GeneratedFile:
    """Represents a generated file."""

    path: str  # Relative path from output directory
    content: str


def write_files(files: list[GeneratedFile], out_dir: str | Path) -> list[Path]:
    """Write generated files to the output directory.

    Args:
        files: Files to write
        out_dir: Base output directory path

    Returns:
        Absolute paths of the written files
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for file in files:
        file_path = out_dir / file.path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(file.content, encoding="utf-8")
        written.append(file_path.resolve())
    return written
