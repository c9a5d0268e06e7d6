"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import list_cmd, new_cmd, render_cmd, toc_cmd


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Markdown enhancement pipeline for blog posts")

app.command(name="render")(render_cmd)
app.command(name="toc")(toc_cmd)
app.command(name="list")(list_cmd)
app.command(name="new")(new_cmd)
