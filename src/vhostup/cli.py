"""Root Typer application for the vhostup CLI."""

from __future__ import annotations

import typer

from vhostup.commands import provision, vhost
from vhostup.log import setup_logging

app = typer.Typer(
    name="vhostup",
    help="Provision an nginx virtual host with a Let's Encrypt certificate.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command."),
) -> None:
    setup_logging(verbose)


app.command(name="provision")(provision.provision)
app.command(name="render")(provision.render)
app.add_typer(vhost.app, name="vhost", help="Inspect provisioned nginx sites.")

if __name__ == "__main__":
    app()
