"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from optbook.utils.logger import setup_logger as _setup_logger
from optbook.utils.timestamp import format_elapsed

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, converter: Optional[str] = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        converter: Converter executable recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Converter": converter or "pandoc"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(source: Path, output: Path, command: list) -> None:
    """Log start of a render with context."""
    _log_info(f"Rendering {source.name} -> {output.name}")
    _log_debug(f"  Source: {source}")
    _log_debug(f"  Output: {output}")
    _log_debug(f"  Command: {' '.join(str(part) for part in command)}")


def log_render_result(result, verbose: bool = False) -> None:
    """
    Log render result with diagnostics.

    Args:
        result: RenderResult from render_document()
        verbose: Show every converter warning and the raw converter output
    """
    pages = f", {result.page_count} pages" if result.page_count is not None else ""
    _log_success(f"Render succeeded ({format_elapsed(result.elapsed_s)}{pages})")
    if result.output_path:
        _log_info(f"PDF saved to: {result.output_path}")

    if result.warnings:
        _log_warning(f"{len(result.warnings)} converter warnings")
        warning_limit = len(result.warnings) if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    if verbose:
        log_converter_output(result.stdout, result.stderr)


def log_render_failure(error: Exception, elapsed_time: float) -> None:
    """Log a failed render, including raw converter stderr when present."""
    _log_error(f"Render failed ({format_elapsed(elapsed_time)})")
    _log_error(f"  {type(error).__name__}: {getattr(error, 'message', error)}")
    log_converter_output("", getattr(error, "stderr", ""))


def log_converter_output(stdout: str, stderr: str) -> None:
    """Dump raw converter output at debug level."""
    # opt(raw=True) keeps loguru from prefixing every line of multi-line output
    if stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nPANDOC STDOUT:\n{'=' * 80}\n{stdout}\n")
    if stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nPANDOC STDERR:\n{'=' * 80}\n{stderr}\n")
