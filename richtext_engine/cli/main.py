"""Main CLI entry point for the richtext-engine command.

This module provides the Typer application that exposes the conversion
engine on the command line. Every command reads a file (``-`` for stdin),
writes the result to stdout or ``--output``, and reports warnings and
statistics on stderr.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from richtext_engine import __version__
from richtext_engine.content_converter import (
    detect_content_type,
    get_conversion_stats,
    html_to_markdown,
    markdown_to_html,
    sanitize,
    validate_conversion,
    validate_html,
    validate_markdown,
)
from richtext_engine.errors import EngineError
from richtext_engine.models import ContentType, ConversionOptions, ConversionResult, GFMOptions

from .errors import CLIError, InputFileError
from .models import ExitCode
from .options_loader import OptionsLoader
from .output import OutputHandler

app = typer.Typer(
    name="richtext-engine",
    help="""Convert, classify and sanitize rich-text editor content.

QUICK START:
  richtext-engine detect note.txt                 # html, markdown, mixed or plain
  richtext-engine to-html note.md -o note.html    # GFM Markdown → safe HTML
  richtext-engine to-markdown page.html --strict  # HTML → Markdown, fail on data loss
  cat page.html | richtext-engine sanitize -      # Allow-list sanitize stdin""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

APP_LOGGER_NAME = "richtext_engine"
STDIN_PATH = "-"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'richtext_engine' namespace logger to avoid
    affecting third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(level)
    # Repeated invocations in one process must not stack handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"richtext-engine_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _read_input(file_path: str) -> str:
    """Read a source document, with ``-`` meaning stdin.

    Raises:
        InputFileError: If the file cannot be read
    """
    if file_path == STDIN_PATH:
        return sys.stdin.read()
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise InputFileError(file_path, 'read', 'File not found')
    except PermissionError:
        raise InputFileError(file_path, 'read', 'Permission denied')
    except UnicodeDecodeError:
        raise InputFileError(file_path, 'read', 'File is not valid UTF-8')
    except OSError as e:
        raise InputFileError(file_path, 'read', str(e))


def _write_output(output: OutputHandler, content: str, output_path: Optional[str]) -> None:
    """Write converted content to a file, or to stdout when no path is given.

    Raises:
        InputFileError: If the file cannot be written
    """
    if output_path is None:
        output.emit(content)
        return
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
    except PermissionError:
        raise InputFileError(output_path, 'write', 'Permission denied')
    except OSError as e:
        raise InputFileError(output_path, 'write', str(e))
    output.success(f"Wrote {output_path}")


def _output_handler(ctx: typer.Context) -> OutputHandler:
    settings = ctx.obj or {}
    return OutputHandler(
        verbosity=settings.get("verbosity", 0),
        no_color=settings.get("no_color", False),
    )


@contextmanager
def _command_errors(output: OutputHandler, operation: str) -> Iterator[None]:
    """Map exceptions raised by a command body to exit codes."""
    try:
        yield
    except typer.Exit:
        raise
    except CLIError as e:
        logger.error(f"{operation} failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.INVALID_INPUT)
    except EngineError as e:
        logger.error(f"{operation} failed: {e}")
        output.error(f"{operation} failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception(f"Unexpected error during {operation.lower()}")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _report_result(output: OutputHandler, result: ConversionResult, stats: bool) -> None:
    output.print_warnings(result.warnings)
    output.debug(f"Metadata: {result.metadata}")
    if stats:
        output.print_stats(get_conversion_stats(result))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"richtext-engine version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Convert, classify and sanitize rich-text editor content."""
    _configure_logging(verbosity, logdir)
    ctx.obj = {"verbosity": verbosity, "no_color": no_color}


@app.command()
def detect(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Input file, or - for stdin"),
) -> None:
    """Print the content type of a document: html, markdown, mixed or plain."""
    output = _output_handler(ctx)
    with _command_errors(output, "Detection"):
        text = _read_input(file)
        content_type = detect_content_type(text)
        output.emit(str(content_type))


@app.command("to-html")
def to_html(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Markdown input file, or - for stdin"),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with a 'gfm' options mapping",
        metavar="PATH",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write HTML to this file instead of stdout",
        metavar="PATH",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Print conversion statistics",
    ),
) -> None:
    """Render GitHub-Flavored Markdown to sanitized HTML."""
    output = _output_handler(ctx)
    with _command_errors(output, "Markdown conversion"):
        markdown = _read_input(file)
        options = OptionsLoader.load(config) if config else GFMOptions()
        output.debug(f"Options: {options.to_dict()}")

        result = markdown_to_html(markdown, options)
        _write_output(output, result.content, output_path)
        _report_result(output, result, stats)
        output.info(f"Rendered with the {result.metadata.get('renderer')} renderer")

        if not validate_conversion(markdown, result.content, ContentType.MARKDOWN, ContentType.HTML):
            output.warning("Converted HTML failed round-trip validation")
            raise typer.Exit(ExitCode.VALIDATION_FAILED)


@app.command("to-markdown")
def to_markdown(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML input file, or - for stdin"),
    preserve_comments: bool = typer.Option(
        False,
        "--preserve-comments",
        help="Keep HTML comments verbatim in the Markdown",
    ),
    preserve_unknown_tags: bool = typer.Option(
        False,
        "--preserve-unknown-tags",
        help="Keep sup, sub, mark, kbd, var and samp as inline HTML",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write Markdown to this file instead of stdout",
        metavar="PATH",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Print conversion statistics",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with code 2 when the conversion dropped content",
    ),
) -> None:
    """Convert HTML to GitHub-Flavored Markdown, reporting data loss."""
    output = _output_handler(ctx)
    with _command_errors(output, "HTML conversion"):
        html = _read_input(file)
        options = ConversionOptions(
            preserve_comments=preserve_comments,
            preserve_unknown_tags=preserve_unknown_tags,
        )

        result = html_to_markdown(html, options)
        _write_output(output, result.content, output_path)
        _report_result(output, result, stats)

        if result.data_loss:
            output.warning("Some content could not be represented in Markdown")
            if strict:
                raise typer.Exit(ExitCode.DATA_LOSS)

        if not validate_conversion(html, result.content, ContentType.HTML, ContentType.MARKDOWN):
            output.warning("Converted Markdown failed round-trip validation")
            raise typer.Exit(ExitCode.VALIDATION_FAILED)


@app.command("sanitize")
def sanitize_command(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML input file, or - for stdin"),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write sanitized HTML to this file instead of stdout",
        metavar="PATH",
    ),
) -> None:
    """Reduce HTML to the editor's safe allow-list."""
    output = _output_handler(ctx)
    with _command_errors(output, "Sanitization"):
        html = _read_input(file)
        _write_output(output, sanitize(html), output_path)


@app.command()
def check(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Input file, or - for stdin"),
    content_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Syntax to check: markdown or html (detected when omitted)",
    ),
) -> None:
    """Check a Markdown or HTML document for syntax problems."""
    output = _output_handler(ctx)
    with _command_errors(output, "Syntax check"):
        text = _read_input(file)
        if content_format is None:
            detected = detect_content_type(text)
            content_format = "html" if detected == ContentType.HTML else "markdown"
            output.info(f"Detected content type: {detected}")

        content_format = content_format.lower()
        if content_format == "html":
            report = validate_html(text)
        elif content_format == "markdown":
            report = validate_markdown(text)
        else:
            output.error(f"Unsupported format '{content_format}' (use markdown or html)")
            raise typer.Exit(ExitCode.INVALID_INPUT)

        output.print_report(report)
        if not report.valid:
            raise typer.Exit(ExitCode.VALIDATION_FAILED)


@app.command("init-options")
def init_options(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Where to write the options file"),
) -> None:
    """Write an options file holding the default GFM options."""
    output = _output_handler(ctx)
    with _command_errors(output, "Options export"):
        OptionsLoader.save(path, GFMOptions())
        output.success(f"Wrote default options to {path}")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m richtext_engine.cli.main
if __name__ == "__main__":
    main()
