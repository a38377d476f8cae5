"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blocksearch.cli.commands import import_cmd, init_cmd, search_cmd


app = typer.Typer(name="blocksearch", no_args_is_help=True, help="Find posts that embed a block-editor block")

app.command(name="search")(search_cmd)
app.command(name="init")(init_cmd)
app.command(name="import")(import_cmd)
