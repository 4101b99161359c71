#!/usr/bin/env python3
"""
LaTeX Preview Pane CLI

Compiles a LaTeX document, shows what the preview pane would display, and
highlights the source lines the compiler reported errors on.

Commands:
    compile - Run one compile-and-refresh cycle
    watch   - Recompile every time the source file is saved
    open    - Open the compiled PDF in the system viewer
    errors  - List error line numbers found in a compiler log

Examples:\n

    preview_pane.py compile paper.tex                       # One cycle

    preview_pane.py watch paper.tex --orientation below     # Recompile on save

    preview_pane.py watch chapter1.tex --multifile auctex   # Compile the TeX-master

    preview_pane.py open paper.tex                          # Open paper.pdf

    preview_pane.py errors paper.log                        # Error lines from a log
"""

from pathlib import Path
from typing import Optional

import typer
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from texpane.config import load_config
from texpane.contexts.layout import Workspace
from texpane.contexts.preview import PreviewSession, SaveWatcher, format_cycle_report
from texpane.contexts.rendering import (
    Outcome,
    extract_error_lines,
    parse_latex_diagnostics,
)
from texpane.contexts.rendering.logger import setup_rendering_logger

app = typer.Typer(
    help="Preview compiled LaTeX documents and highlight compile errors",
    add_completion=False,
    invoke_without_command=True,
)

DocumentArg = Annotated[
    Path,
    typer.Argument(help="LaTeX source file", exists=True, dir_okay=False, resolve_path=True),
]
CompilerOpt = Annotated[
    Optional[str], typer.Option("--compiler", "-c", help="Compiler binary (default: pdflatex)")
]
ShellEscapeOpt = Annotated[
    Optional[bool],
    typer.Option("--shell-escape/--no-shell-escape", help="Pass the shell-escape flag"),
]
OrientationOpt = Annotated[
    Optional[str],
    typer.Option("--orientation", "-o", help="Preview side: left, right, above, below"),
]
MultifileOpt = Annotated[
    Optional[str],
    typer.Option("--multifile", "-m", help="Master file handling: off, auctex, prompt"),
]
SeparateGroupOpt = Annotated[
    Optional[bool],
    typer.Option("--separate-group/--split", help="Open the preview in a new window group"),
]
ConfigOpt = Annotated[
    Optional[Path],
    typer.Option("--config", help="YAML file with preview settings", exists=True, dir_okay=False),
]
VerboseOpt = Annotated[
    bool, typer.Option("--verbose", "-v", help="Show debug logging and full compiler output")
]


def _prompt(text: str) -> Optional[str]:
    return typer.prompt(text, default="", show_default=False)


def _start_session(
    config_path: Optional[Path],
    verbose: bool,
    **overrides,
) -> PreviewSession:
    try:
        config = load_config(config_path, **overrides)
    except (ValueError, OmegaConfBaseException) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = Path(config.logs_path) if config.logs_path else None
    setup_rendering_logger(log_dir, compiler=config.compiler, verbose=verbose)

    return PreviewSession(Workspace(prompt=_prompt), config, verbose=verbose)


def _echo_report(session: PreviewSession) -> None:
    resolution = session.last_resolution
    if resolution is None:
        typer.secho(f"✗ {session.workspace.last_message}", fg=typer.colors.YELLOW)
        return

    if resolution.outcome in (Outcome.LOADED, Outcome.REFRESHED):
        typer.secho("✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    elif resolution.outcome == Outcome.MISSING_ARTIFACT:
        typer.secho("✗ Compilation produced no PDF", fg=typer.colors.YELLOW, bold=True)
    else:
        typer.secho("✗ Compilation failed", fg=typer.colors.RED, bold=True)

    typer.echo(format_cycle_report(session))
    typer.echo("")


def _run_cycle(session: PreviewSession, document: Path) -> None:
    try:
        session.activate(document)
    except OSError as e:
        typer.secho(
            f"Error: could not run {session.config.compiler}: {e}\n", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    _echo_report(session)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("compile")
def compile_command(
    document: DocumentArg,
    compiler: CompilerOpt = None,
    shell_escape: ShellEscapeOpt = None,
    orientation: OrientationOpt = None,
    multifile: MultifileOpt = None,
    separate_group: SeparateGroupOpt = None,
    config_path: ConfigOpt = None,
    verbose: VerboseOpt = False,
):
    """
    Compile a document once and report the preview state.

    Exits with code 1 if the compile failed or produced no PDF.

    Examples:\n

        $ preview_pane.py compile paper.tex

        $ preview_pane.py compile paper.tex --compiler xelatex --shell-escape
    """
    session = _start_session(
        config_path,
        verbose,
        compiler=compiler,
        shell_escape=shell_escape,
        orientation=orientation,
        multifile_mode=multifile,
        use_separate_group=separate_group,
    )
    typer.secho(f"\nCompiling: {document.name}", fg=typer.colors.BLUE, bold=True)
    _run_cycle(session, document)

    resolution = session.last_resolution
    succeeded = resolution is not None and resolution.outcome in (Outcome.LOADED, Outcome.REFRESHED)
    raise typer.Exit(code=0 if succeeded else 1)


@app.command("watch")
def watch_command(
    document: DocumentArg,
    compiler: CompilerOpt = None,
    shell_escape: ShellEscapeOpt = None,
    orientation: OrientationOpt = None,
    multifile: MultifileOpt = None,
    separate_group: SeparateGroupOpt = None,
    config_path: ConfigOpt = None,
    verbose: VerboseOpt = False,
):
    """
    Keep the preview up to date: recompile whenever the document is saved.

    Press Ctrl+C to stop.

    Examples:\n

        $ preview_pane.py watch paper.tex

        $ preview_pane.py watch chapter1.tex --multifile prompt
    """
    session = _start_session(
        config_path,
        verbose,
        compiler=compiler,
        shell_escape=shell_escape,
        orientation=orientation,
        multifile_mode=multifile,
        use_separate_group=separate_group,
    )
    typer.secho(f"\nWatching: {document.name}", fg=typer.colors.BLUE, bold=True)
    _run_cycle(session, document)

    # Runs after the session's own save hook
    session.source.add_save_hook(lambda: _echo_report(session))

    watcher = SaveWatcher(session.source)
    watcher.start()
    try:
        watcher.run()
    except KeyboardInterrupt:
        typer.echo("\nStopped watching.")
    except OSError as e:
        typer.secho(
            f"Error: could not run {session.config.compiler}: {e}\n", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    finally:
        session.deactivate()


@app.command("open")
def open_command(
    document: DocumentArg,
    multifile: MultifileOpt = None,
    config_path: ConfigOpt = None,
):
    """
    Open the document's compiled PDF in the system viewer.

    Examples:\n

        $ preview_pane.py open paper.tex
    """
    session = _start_session(config_path, False, multifile_mode=multifile)
    session.activate(document, refresh=False)

    if not session.open_in_viewer():
        typer.secho(session.workspace.last_message, fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)


@app.command("errors")
def errors_command(
    log_file: Annotated[
        Path, typer.Argument(help="Compiler output or .log file", exists=True, dir_okay=False)
    ],
    verbose: VerboseOpt = False,
):
    """
    List the source line numbers a compiler log reports errors on.

    Examples:\n

        $ preview_pane.py errors paper.log

        $ preview_pane.py errors paper.log --verbose   # Include error and warning messages
    """
    # pdflatex writes log files in latin-1 encoding (font metadata contains non-UTF-8)
    output = log_file.read_text(encoding="latin-1")
    lines = extract_error_lines(output)

    if not lines:
        typer.secho("No error line references found", fg=typer.colors.GREEN)
    else:
        typer.echo(" ".join(str(line) for line in lines))

    if verbose:
        errors, warnings = parse_latex_diagnostics(output)
        for error in errors:
            typer.secho(f"  ! {error}", fg=typer.colors.RED)
        for warning in warnings:
            typer.secho(f"  - {warning}", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
