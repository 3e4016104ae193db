"""CLI entrypoint: Typer app definition and command registration"""

import typer

from semmark.cli.commands import (
    main_callback,
    parse_cmd,
    render_cmd,
    strip_cmd,
    validate_cmd,
    wrap_cmd,
)


app = typer.Typer(name="semmark", no_args_is_help=True, help="Semantic markup parser with thread and wiki views")

app.callback()(main_callback)
app.command(name="parse")(parse_cmd)
app.command(name="render")(render_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="strip")(strip_cmd)
app.command(name="wrap")(wrap_cmd)
