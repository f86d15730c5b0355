import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from code_helper.cli.serve import serve_app
from code_helper.cli.tasks import ask, prompt
from code_helper.cli.users import users_app

app = typer.Typer(
    name="code-helper",
    help="AI Code Helper CLI: explain, fix, convert and document code.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("prompt")(prompt)
app.command("ask")(ask)
app.add_typer(serve_app, name="serve")
app.add_typer(users_app, name="users")


@app.callback()
def _configure_logging(
    log_level: Annotated[
        str, typer.Option("--log-level", envvar="LOG_LEVEL", help="Logging level (DEBUG, INFO, WARNING, ...).")
    ] = "INFO",
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def main() -> None:
    app()
