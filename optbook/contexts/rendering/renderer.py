"""
Markdown to PDF Rendering Module

Handles conversion of the guide's Markdown source to PDF using pandoc with the
eisvogel LaTeX template and the listings package for code blocks.
"""

import os
import re
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from optbook.contexts.authoring.front_matter import DocumentMetadata, read_front_matter
from optbook.contexts.rendering.build_config import PROJECT_ROOT, RenderOptions, load_build_config
from optbook.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_render_failure,
    log_render_result,
    log_render_start,
    setup_rendering_logger,
)
from optbook.exceptions import ConversionError, NotFoundError, RenderingError, WriteError
from optbook.utils.pdf_processing import page_count
from optbook.utils.timestamp import now

load_dotenv()

LOGS_PATH = Path(os.getenv("LOGS_PATH", PROJECT_ROOT / "outs" / "logs"))
PANDOC_DATA_DIR = os.getenv("PANDOC_DATA_DIR")

# pandoc prefixes non-fatal diagnostics with "[WARNING]"
WARNING_PATTERN = re.compile(r"^\[WARNING\]\s*(.+)$", re.MULTILINE)

# pandoc I/O failure messages, e.g. "withBinaryFile: does not exist (No such file or directory)"
IO_FAILURE_PATTERN = re.compile(
    r"(permission denied|does not exist|no such file or directory|read-only file system"
    r"|is a directory|resource busy)",
    re.IGNORECASE,
)


@dataclass
class RenderResult:
    """
    Result of a successful render.

    Attributes:
        output_path: Path to the generated PDF
        command: Converter command line that produced it
        stdout: Standard output from the converter
        stderr: Standard error from the converter
        warnings: Converter warnings ("[WARNING]" lines)
        page_count: Number of pages in generated PDF (None if not available)
        elapsed_s: Wall time spent in the converter
        metadata: Metadata header of the source document
        log_dir: Directory holding render.log (set by build_document)
    """

    output_path: Path
    command: List[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None
    elapsed_s: float = 0.0
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    log_dir: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.output_path.is_file() and self.output_path.stat().st_size > 0


def pandoc_data_dirs() -> List[Path]:
    """
    Candidate pandoc user data directories, in pandoc's lookup order.

    PANDOC_DATA_DIR (the --data-dir equivalent) comes first when set.
    """
    dirs = []
    if PANDOC_DATA_DIR:
        dirs.append(Path(PANDOC_DATA_DIR).expanduser())

    xdg_data_home = os.getenv("XDG_DATA_HOME")
    if xdg_data_home:
        dirs.append(Path(xdg_data_home) / "pandoc")
    dirs.append(Path.home() / ".local" / "share" / "pandoc")
    dirs.append(Path.home() / ".pandoc")

    appdata = os.getenv("APPDATA")
    if appdata:
        dirs.append(Path(appdata) / "pandoc")

    return dirs


def _template_candidates(name: str) -> List[str]:
    """File names pandoc would accept for a template name."""
    candidates = [name]
    suffix = Path(name).suffix
    if not suffix:
        candidates.append(f"{name}.latex")
    elif suffix == ".tex":
        # eisvogel ships as eisvogel.latex; accept either spelling
        candidates.append(str(Path(name).with_suffix(".latex")))
    return candidates


def resolve_template(template: str, source_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Locate a template file the way pandoc does.

    Checks the name as a path (absolute, relative to the working directory, then
    relative to the source's directory), then the templates/ folder of each pandoc
    user data directory.

    Args:
        template: Template name or path (e.g., "eisvogel", "eisvogel.tex")
        source_dir: Directory of the source document

    Returns:
        Path to the template file, or None if not found locally
    """
    search_roots = [Path.cwd()]
    if source_dir is not None:
        search_roots.append(source_dir)
    search_roots.extend(data_dir / "templates" for data_dir in pandoc_data_dirs())

    for candidate in _template_candidates(template):
        candidate_path = Path(candidate).expanduser()
        if candidate_path.is_absolute():
            if candidate_path.is_file():
                return candidate_path
            continue
        for root in search_roots:
            path = root / candidate_path
            if path.is_file():
                return path.resolve()

    return None


def build_command(
    source: Path, output: Path, options: RenderOptions, template: Optional[str] = None
) -> List[str]:
    """
    Assemble the converter command line.

    Args:
        source: Markdown source
        output: PDF destination
        options: Build settings
        template: Template argument to pass (defaults to options.template)

    Returns:
        Command as a list suitable for subprocess.run
    """
    template = template if template is not None else options.template

    cmd = [options.converter, str(source), "--from", options.from_format]
    if template:
        cmd.append(f"--template={template}")
    if options.listings:
        cmd.append("--listings")
    if options.pdf_engine:
        cmd.append(f"--pdf-engine={options.pdf_engine}")
    cmd.extend(options.extra_args)
    cmd.extend(["-o", str(output)])

    return cmd


def parse_warnings(stderr: str) -> List[str]:
    """Extract converter warnings from stderr."""
    return [match.group(1).strip() for match in WARNING_PATTERN.finditer(stderr)]


def _check_source(source: Path) -> None:
    if not source.exists():
        raise ConversionError("Source document not found", path=source)
    if not source.is_file() or not os.access(source, os.R_OK):
        raise ConversionError("Source document is not a readable file", path=source)


def _check_output_writable(output: Path) -> None:
    parent = output.parent
    if not parent.is_dir():
        raise WriteError("Output directory does not exist", path=parent)
    if not os.access(parent, os.W_OK):
        raise WriteError("Output directory is not writable", path=parent)
    if output.is_dir():
        raise WriteError("Output path is a directory", path=output)
    if output.exists() and not os.access(output, os.W_OK):
        raise WriteError("Output file is not writable", path=output)


def _classify_failure(returncode: int, stderr: str, output: Path) -> RenderingError:
    """
    Map a failed converter run onto WriteError or ConversionError.

    Output failures name the output file together with an I/O failure message;
    everything else is a conversion problem.
    """
    for line in stderr.splitlines():
        if (str(output) in line or output.name in line) and IO_FAILURE_PATTERN.search(line):
            return WriteError(f"Converter could not write output: {line.strip()}", path=output)

    return ConversionError("Converter failed", path=output, returncode=returncode, stderr=stderr)


def render_document(
    source: Path,
    output: Path,
    options: Optional[RenderOptions] = None,
) -> RenderResult:
    """
    Render a Markdown document to PDF.

    Pure conversion function - no log directory is created. Preconditions are checked
    before the converter runs and before the output path is touched.

    Args:
        source: Path to the Markdown source
        output: Path to the PDF to create or replace
        options: Build settings (default: RenderOptions())

    Returns:
        RenderResult with output path and converter diagnostics

    Raises:
        ConversionError: Source missing or unreadable, malformed metadata header,
            converter not installed, template not found, or converter failure
        WriteError: Output path not writable
    """
    options = options or RenderOptions()
    source = Path(source).resolve()
    output = Path(output).absolute()

    _check_source(source)
    metadata = read_front_matter(source)

    converter_path = shutil.which(options.converter)
    if converter_path is None:
        raise ConversionError(f"Converter not found on PATH: {options.converter}")

    _check_output_writable(output)

    template_arg = options.template
    if options.template:
        resolved = resolve_template(options.template, source_dir=source.parent)
        if resolved is not None:
            template_arg = str(resolved)
        else:
            _log_warning(f"Template not found locally, deferring to converter: {options.template}")

    cmd = build_command(source, output, options, template=template_arg)
    log_render_start(source, output, cmd)

    # Remove stale output so a leftover PDF never passes for a fresh one
    if output.exists():
        try:
            output.unlink()
        except OSError as e:
            raise WriteError(f"Could not replace existing output: {e}", path=output) from e

    start_time = time.time()

    # Run from the source directory so relative image paths in the document resolve
    result = subprocess.run(
        cmd,
        cwd=source.parent,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )

    elapsed_s = time.time() - start_time

    if result.returncode != 0:
        raise _classify_failure(result.returncode, result.stderr, output)

    if not output.is_file() or output.stat().st_size == 0:
        raise ConversionError(
            "Converter reported success but produced no output",
            path=output,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    return RenderResult(
        output_path=output,
        command=cmd,
        stdout=result.stdout,
        stderr=result.stderr,
        warnings=parse_warnings(result.stderr),
        page_count=page_count(output),
        elapsed_s=elapsed_s,
        metadata=metadata,
    )


def build_document(
    options: Optional[RenderOptions] = None,
    verbose: bool = False,
    log_dir: Optional[Path] = None,
) -> RenderResult:
    """
    Render the guide with logging to a timestamped log directory.

    Orchestration function that wraps render_document() with session logging.
    Errors are logged and re-raised.

    Args:
        options: Build settings (default: loaded from configs/build.yaml)
        verbose: Log every converter warning and the raw converter output
        log_dir: Log directory (default: LOGS_PATH/render_<timestamp>)

    Returns:
        RenderResult with log_dir set
    """
    options = options or load_build_config()

    if log_dir is None:
        log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(log_dir, converter=options.converter)

    start_time = time.time()
    try:
        result = render_document(options.source_path, options.output_path, options)
    except RenderingError as e:
        log_render_failure(e, time.time() - start_time)
        raise

    if result.metadata.is_empty:
        _log_warning("Source has no metadata header; PDF title and author will be empty")
    elif result.metadata.title:
        _log_debug(f"  Title: {result.metadata.title}")
    log_render_result(result, verbose=verbose)

    result.log_dir = log_dir
    return result


def clean_output(output: Path, missing_ok: bool = False) -> bool:
    """
    Remove a previously generated output file.

    Args:
        output: Path to the generated PDF
        missing_ok: Treat a missing file as a no-op instead of an error

    Returns:
        True if a file was removed, False if there was nothing to remove

    Raises:
        NotFoundError: If the file does not exist and missing_ok is False
        WriteError: If the path is a directory or cannot be removed
    """
    output = Path(output)

    if output.is_dir() and not output.is_symlink():
        raise WriteError("Refusing to remove a directory", path=output)

    if not output.exists() and not output.is_symlink():
        if missing_ok:
            _log_debug(f"Nothing to clean: {output}")
            return False
        raise NotFoundError("Output file does not exist", path=output)

    try:
        output.unlink()
    except OSError as e:
        raise WriteError(f"Could not remove output: {e}", path=output) from e

    _log_info(f"Removed {output}")
    return True
