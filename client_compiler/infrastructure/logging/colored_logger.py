"""Colored pipeline logger: ANSI-colored console output for client imports.

Each stage of the upload → read → validate → store → export flow gets its own
color so a single import can be followed in the terminal at a glance.

Color scheme:
    Green:   Upload / Storage / Complete
    Yellow:  Spreadsheet reading
    Blue:    Validation
    Magenta: Duplicate key reconciliation
    Cyan:    Export
    Red:     Errors
    Gray:    Details / Stats
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Pipeline Stage Definitions ───────────────────────────────────────

class PipelineStage:
    """(label, color) pairs for each stage of the client import pipeline."""

    UPLOAD = ("UPLOAD", _Colors.GREEN)
    STORAGE = ("STORAGE", _Colors.GREEN)
    READ = ("READ", _Colors.YELLOW)
    VALIDATION = ("VALIDATE", _Colors.BLUE)
    DUPLICATES = ("DUPLICATES", _Colors.MAGENTA)
    EXPORT = ("EXPORT", _Colors.CYAN)
    ERROR = ("ERROR", _Colors.RED)
    COMPLETE = ("COMPLETE", _Colors.GREEN)


def _format_details(kwargs: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v}" for k, v in kwargs.items())


# ── PipelineLogger ───────────────────────────────────────────────────

class PipelineLogger:
    """Color-coded logger for the client import pipeline.

    Usage:
        log = PipelineLogger("ClientImportPipeline")
        log.step_start(PipelineStage.READ, "Reading clientes.xlsx")
        log.detail("Header row OK")
        log.step_complete(PipelineStage.READ, "150 rows read")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str], message: str, **kwargs: Any) -> None:
        """Log the start of an import step in its stage color."""
        label, color = stage
        formatted = f"{color}{_Colors.BOLD}[{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str], message: str, **kwargs: Any) -> None:
        """Log a finished step with a green check mark."""
        label, color = stage
        formatted = f"{color}[{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.GRAY}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(
        self, stage: tuple[str, str], message: str, error: Exception | None = None
    ) -> None:
        """Log a failed step in red, with the exception type and text when given."""
        label, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}[{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log a dimmed sub-line under the current step."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        if kwargs:
            formatted += f" {_Colors.DIM}({_format_details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def separator(self, title: str = "") -> None:
        """Log a horizontal rule, optionally titled, between imports."""
        if title:
            line = f"{'─' * 10} {title} {'─' * max(0, 50 - len(title))}"
        else:
            line = "─" * 60
        self._logger.info(f"{_Colors.GRAY}{line}{_Colors.RESET}")

    def stats(self, **kwargs: Any) -> None:
        """Log counts such as total/valid/invalid on one gray line."""
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}{' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(
        self, stage: tuple[str, str], message: str, **kwargs: Any
    ) -> Iterator[None]:
        """Log start and end of a step with its elapsed time.

        Usage:
            with log.timed_step(PipelineStage.VALIDATION, "Validating 150 clients"):
                validator.validate_all(records)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.2f}s)")
