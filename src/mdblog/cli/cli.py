"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdblog.cli.commands import (
    check_cmd, create_cmd, delete_cmd, edit_cmd, init_cmd,
    list_cmd, new_cmd, show_cmd, update_cmd,
)


app = typer.Typer(name="mdblog", no_args_is_help=True, help="Blog posts as markdown documents with YAML frontmatter")

app.command(name="init")(init_cmd)
app.command(name="check")(check_cmd)
app.command(name="new")(new_cmd)
app.command(name="create")(create_cmd)
app.command(name="update")(update_cmd)
app.command(name="edit")(edit_cmd)
app.command(name="show")(show_cmd)
app.command(name="list")(list_cmd)
app.command(name="delete")(delete_cmd)
