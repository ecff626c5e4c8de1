"""Error types raised by the Inkwell build pipeline.

Every failure in the pipeline surfaces as one of these exceptions. None of
them are caught inside the pipeline; the CLI is the only place that turns
them into a message and an exit status.

Key classes:
- InkwellError: Base error carrying the offending path.
- SiteIOError: Directory or file access failure.
- ParseError: Malformed metadata header or unusable file name.
- RenderError: Markdown conversion failure.
- TemplateError: Missing template or template evaluation failure.
- ConfigError: Malformed inkwell.yaml.
"""

from __future__ import annotations

from pathlib import Path


class InkwellError(Exception):
    """Error during a site build with file context.

    Attributes:
        path: Path of the file or directory involved, if any.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        original_error: BaseException | None = None,
    ):
        self.path = Path(path) if path is not None else None
        self.message = message
        self.original_error = original_error
        super().__init__(f"{self.path}: {message}" if self.path else message)


class SiteIOError(InkwellError):
    """Reading, writing, deleting or creating a file or directory failed."""


class ParseError(InkwellError):
    """A source document could not be split into attributes and body."""


class RenderError(InkwellError):
    """Markdown could not be converted to HTML."""


class TemplateError(InkwellError):
    """A template is missing or failed while rendering."""


class ConfigError(InkwellError):
    """The project configuration file is malformed."""
