"""CLI application for DocVault using Rich and Typer."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from docvault.core.config import COPY_SUFFIX, DOCVAULTS_DIR
from docvault.core.errors import DocVaultError
from docvault.core.service import DocVault
from docvault.core.types import DirectoryNode, TreeNode
from docvault.vault.filetypes import format_file_size

app = typer.Typer(
    name="docvault",
    help="DocVault CLI - manage per-project document vaults",
    no_args_is_help=True,
)

console = Console()


def _get_docvault(ctx: typer.Context) -> DocVault:
    return ctx.obj


def _fail(error: DocVaultError) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _add_nodes(branch: Tree, nodes: list[TreeNode]) -> None:
    for node in nodes:
        if isinstance(node, DirectoryNode):
            child = branch.add(f"[bold blue]{node.name}/[/bold blue]")
            _add_nodes(child, node.children)
        else:
            label = f"{node.name}.{node.ext}" if node.ext is not None else node.name
            size = format_file_size(node.size)
            branch.add(f"{label} [dim]{node.file_type.value} {size}[/dim]")


@app.command()
def init(ctx: typer.Context, vault_id: int = typer.Argument(..., help="Vault ID")):
    """Create a vault and its attachments folder."""
    try:
        root = _get_docvault(ctx).init(vault_id)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Vault {vault_id} ready at {root}[/green]")


@app.command()
def tree(ctx: typer.Context, vault_id: int = typer.Argument(..., help="Vault ID")):
    """Show the vault's file tree."""
    try:
        nodes = _get_docvault(ctx).scan(vault_id)
    except DocVaultError as e:
        _fail(e)

    if not nodes:
        console.print("[dim]Vault is empty.[/dim]")
        return

    root = Tree(f"[bold]vault {vault_id}[/bold]")
    _add_nodes(root, nodes)
    console.print(root)


@app.command()
def mkdir(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument(..., help="Folder vault path"),
):
    """Create a folder and any missing parents."""
    try:
        created = _get_docvault(ctx).create_folder(vault_id, path)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Created {created}[/green]")


@app.command("import")
def import_file(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    source: Path = typer.Argument(..., help="File to import"),
    folder: str = typer.Option("/", "--to", "-t", help="Target folder vault path"),
):
    """Copy an external file into the vault."""
    try:
        info = _get_docvault(ctx).import_file(vault_id, source, folder)
    except DocVaultError as e:
        _fail(e)
    console.print(
        f"[green]Imported {info.path}[/green] "
        f"[dim]({info.file_type.value}, {format_file_size(info.size)})[/dim]"
    )


@app.command()
def info(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument(..., help="File vault path"),
):
    """Show metadata for a file."""
    try:
        descriptor = _get_docvault(ctx).file_info(vault_id, path)
    except DocVaultError as e:
        _fail(e)

    table = Table(title=descriptor.path, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Title", descriptor.filename)
    table.add_row("Extension", descriptor.ext or "-")
    table.add_row("Type", descriptor.file_type.value)
    table.add_row("Size", format_file_size(descriptor.size))
    console.print(table)


@app.command()
def cat(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument(..., help="File vault path"),
):
    """Print a text file."""
    try:
        content = _get_docvault(ctx).read_text(vault_id, path)
    except DocVaultError as e:
        _fail(e)
    typer.echo(content, nl=False)


@app.command()
def write(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument(..., help="File vault path"),
    content: Optional[str] = typer.Option(
        None, "--content", "-c", help="Text to write (default: read stdin)"
    ),
):
    """Write a text file, replacing its content."""
    text = content if content is not None else sys.stdin.read()
    try:
        _get_docvault(ctx).write_text(vault_id, path, text)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Wrote {path}[/green]")


@app.command()
def rm(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument(..., help="Entry vault path"),
):
    """Delete a file or folder."""
    try:
        _get_docvault(ctx).delete(vault_id, path)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[yellow]Deleted {path}[/yellow]")


@app.command()
def rename(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    old_path: str = typer.Argument(..., help="Current vault path"),
    new_path: str = typer.Argument(..., help="New vault path"),
):
    """Rename a file or folder."""
    try:
        renamed = _get_docvault(ctx).rename(vault_id, old_path, new_path)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Renamed to {renamed}[/green]")


@app.command()
def cp(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    source: str = typer.Argument(..., help="Entry vault path"),
    folder: str = typer.Argument("/", help="Target folder vault path"),
):
    """Copy a file or folder, renaming on collision."""
    try:
        copied = _get_docvault(ctx).copy(vault_id, source, folder)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Copied to {copied}[/green]")


@app.command()
def mv(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    source: str = typer.Argument(..., help="Entry vault path"),
    folder: str = typer.Argument("/", help="Target folder vault path"),
):
    """Move a file or folder into another folder."""
    try:
        moved = _get_docvault(ctx).move(vault_id, source, folder)
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Moved to {moved}[/green]")


@app.command()
def attach(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    source: Path = typer.Argument(..., help="File to store as an attachment"),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Attachment name (default: source file name)"
    ),
):
    """Store a file in the vault's attachments folder."""
    try:
        data = source.read_bytes()
    except OSError as e:
        console.print(f"[red]Error: cannot read {source}: {e}[/red]")
        raise typer.Exit(1)

    try:
        reference = _get_docvault(ctx).save_attachment(
            vault_id, name or source.name, data
        )
    except DocVaultError as e:
        _fail(e)
    console.print(f"[green]Saved {reference}[/green]")


@app.command("open")
def open_entry(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument("/", help="Entry vault path"),
):
    """Reveal an entry in the system file browser."""
    try:
        _get_docvault(ctx).open_in_explorer(vault_id, path)
    except DocVaultError as e:
        _fail(e)


@app.command()
def where(
    ctx: typer.Context,
    vault_id: int = typer.Argument(..., help="Vault ID"),
    path: str = typer.Argument("/", help="Entry vault path"),
):
    """Print the absolute on-disk path of an entry."""
    try:
        absolute = _get_docvault(ctx).absolute_path(vault_id, path)
    except DocVaultError as e:
        _fail(e)
    typer.echo(absolute)


@app.callback()
def main(
    ctx: typer.Context,
    base_dir: Optional[Path] = typer.Option(
        None,
        "--base-dir",
        "-b",
        help="Directory holding all vaults (default: $DOCVAULT_DATA_DIR/data/docvaults)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """DocVault CLI - manage per-project document vaults."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    ctx.obj = DocVault(base_dir or DOCVAULTS_DIR, copy_suffix=COPY_SUFFIX)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
