"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional

import typer

from qamark.cli.commands import export_cmd, import_cmd, init_cmd, render_cmd, setup_logging, stats_cmd, status_cmd


app = typer.Typer(name="qamark", no_args_is_help=True, help="Training document rendering and Q&A export")


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    setup_logging(log_level)


app.command(name="render")(render_cmd)
app.command(name="init")(init_cmd)
app.command(name="import")(import_cmd)
app.command(name="status")(status_cmd)
app.command(name="export")(export_cmd)
app.command(name="stats")(stats_cmd)
