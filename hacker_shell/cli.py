"""Command-line entry point for hacker-shell."""

from typing import Optional

import typer
from pydantic import ValidationError

from .config import get_settings
from .shell import Shell

app = typer.Typer(
    name="hsh",
    help="Hacker Shell: a minimal interactive command loop.",
    add_completion=False,
)


@app.command()
def main(
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt printed before each line."),
    launch_external: Optional[bool] = typer.Option(
        None,
        "--launch-external/--no-launch-external",
        help="Run unknown commands as programs instead of printing help.",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level for stderr logging."),
) -> None:
    """Start the interactive shell."""
    unknown_command = None
    if launch_external is not None:
        unknown_command = "launch" if launch_external else "help"

    try:
        settings = get_settings(prompt=prompt, unknown_command=unknown_command, log_level=log_level)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            typer.echo(f"hsh: invalid setting {field}: {error['msg']}", err=True)
        raise typer.Exit(2)

    exit_code = Shell(settings=settings).run()
    raise typer.Exit(exit_code)


def run() -> None:
    """Console script entry point."""
    app()
