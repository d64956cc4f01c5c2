"""Batch conversion: many files, one failure never stops the rest."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from css2scss.converter import Converter
from css2scss.errors import ParseError


@dataclass(frozen=True)
class FileOutcome:
    source: Path
    output: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def total(self) -> int:
        return len(self.outcomes)


def output_path_for(source: Path, output_dir: Path | None = None) -> Path:
    """``style.css`` -> ``style.scss``, optionally inside *output_dir*."""
    target = source.with_suffix(".scss")
    if output_dir is not None:
        target = output_dir / target.name
    return target


def convert_file(converter: Converter, source: Path, output: Path | None = None) -> Path:
    """Convert one file and write the result; returns the output path."""
    target = output or output_path_for(source)
    scss = converter.convert(source.read_text(encoding="utf-8"))
    target.write_text(scss, encoding="utf-8")
    return target


def find_stylesheets(directory: Path) -> list[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".css")


def convert_directory(
    converter: Converter, directory: Path, output_dir: Path | None = None
) -> BatchReport:
    """Convert every ``*.css`` file in *directory*.

    Raises FileNotFoundError only when *directory* itself is missing;
    per-file parse and I/O failures are recorded in the report.
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory '{directory}' does not exist")
    target_dir = output_dir or directory
    target_dir.mkdir(parents=True, exist_ok=True)

    report = BatchReport()
    for source in find_stylesheets(directory):
        try:
            output = convert_file(converter, source, output_path_for(source, target_dir))
        except (ParseError, OSError, UnicodeDecodeError) as exc:
            report.outcomes.append(FileOutcome(source=source, error=str(exc)))
        else:
            report.outcomes.append(FileOutcome(source=source, output=output))
    return report
