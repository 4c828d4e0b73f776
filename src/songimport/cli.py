import json
import logging
import re
import sys
from pathlib import Path

import click

from .exceptions import SongImportError
from .groups import split_lyric_groups
from .models import ExtractionResult, ParsedSongImport
from .parser import parse_song_import_text
from .registry import get_extractor, supported_extensions

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = {"__MACOSX"}


def _title_from_filename(path: Path) -> str:
    """Derive a fallback song title from a file name: ``Amazing Grace.pro.txt`` → ``Amazing Grace``."""
    return re.sub(r"\s*\.(pro|pptx?|txt)$", "", path.stem, flags=re.IGNORECASE).strip()


def _is_hidden(path: Path) -> bool:
    # also covers macOS "._" resource forks
    return path.name.startswith(".")


def _collect_files(paths: tuple[Path, ...]) -> list[Path]:
    """Expand directories into the supported files they contain, depth first, sorted."""
    extensions = set(supported_extensions())
    files: list[Path] = []
    for path in paths:
        if not path.is_dir():
            files.append(path)
            continue
        for child in sorted(path.rglob("*")):
            relative = child.relative_to(path)
            if any(part in _SKIPPED_DIRS or part.startswith(".") for part in relative.parts[:-1]):
                continue
            if child.is_file() and not _is_hidden(child) and child.suffix.lower() in extensions:
                files.append(child)
    return files


def _read(path: Path) -> ExtractionResult:
    if str(path) == "-":
        return ExtractionResult(text=click.get_text_stream("stdin").read())
    return get_extractor(path.name).extract_file(path)


def _configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------


def _render_json(results: list[tuple[str, ParsedSongImport, str | None]]) -> str:
    records = []
    for source, song, warning in results:
        record = {"source": source, **song.to_dict()}
        if warning:
            record["warning"] = warning
        records.append(record)
    return json.dumps(records, indent=2, ensure_ascii=False) + "\n"


def _render_summary(results: list[tuple[str, ParsedSongImport, str | None]]) -> str:
    lines = []
    for source, song, _ in results:
        details = []
        if song.default_key:
            details.append(f"key {song.default_key}")
        if song.ccli_id:
            details.append(f"CCLI {song.ccli_id}")
        if song.artist:
            details.append(f"by {song.artist}")
        groups = split_lyric_groups(song.lyrics)
        details.append(f"{len(groups)} section(s)" if song.has_group_headings else "no headings")
        lines.append(f"{source}: {song.title or '(untitled)'} [{', '.join(details)}]")
    return "".join(line + "\n" for line in lines)


_RENDERERS = {
    "json": _render_json,
    "summary": _render_summary,
}


@click.command()
@click.argument("paths", nargs=-1, required=True,
                type=click.Path(exists=True, allow_dash=True, path_type=Path))
@click.option("-f", "--format", "output_format", type=click.Choice(sorted(_RENDERERS)),
              default="json", show_default=True, envvar="SONGIMPORT_FORMAT",
              help="Output format.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              type=click.Path(dir_okay=False, path_type=Path),
              help="Write output to a file instead of stdout.")
@click.option("--fallback-title-from-filename/--no-fallback-title-from-filename",
              default=True, show_default=True,
              help="Use the file name as the title when the text has none.")
@click.option("--limit", type=click.IntRange(min=1), default=None,
              help="Import at most N files.")
@click.option("-v", "--verbose", count=True, envvar="SONGIMPORT_VERBOSE",
              help="Log progress to stderr (-vv for debug detail).")
def main(paths: tuple[Path, ...], output_format: str, output_path: Path | None,
         fallback_title_from_filename: bool, limit: int | None, verbose: int) -> None:
    """Parse freeform lyric sheets into song metadata and lyrics.

    \b
    PATHS may be files, directories (searched recursively) or "-" for stdin.
    Supported file types: .txt, .rtf, .html
    """
    _configure_logging(verbose)

    files = _collect_files(paths)
    if limit is not None:
        files = files[:limit]

    results: list[tuple[str, ParsedSongImport, str | None]] = []
    failed = False

    for path in files:
        source = "<stdin>" if str(path) == "-" else str(path)

        # --- Extract ---
        try:
            extracted = _read(path)
        except SongImportError as exc:
            click.echo(f"Error: {exc}", err=True)
            failed = True
            continue
        if extracted.warning:
            click.echo(f"Warning: {source}: {extracted.warning}", err=True)

        # --- Parse ---
        fallback = _title_from_filename(path) if fallback_title_from_filename and source != "<stdin>" else None
        song = parse_song_import_text(extracted.text, fallback_title=fallback or None)
        logger.info("Parsed %s: %s", source, song.title or "(untitled)")
        results.append((source, song, extracted.warning))

    # --- Output ---
    output = _RENDERERS[output_format](results)
    if output_path:
        output_path.write_text(output, encoding="utf-8")
        click.echo(f"Written to {output_path}", err=True)
    else:
        click.echo(output, nl=False)

    if failed:
        sys.exit(1)
