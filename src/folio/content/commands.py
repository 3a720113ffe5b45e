"""CLI commands for validating and inspecting site content."""

from __future__ import annotations

import json as json_module
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from folio.content.document import Document
    from folio.content.store import ContentStore

console = Console()


def _load_store(ctx, include_drafts: bool = False) -> ContentStore:
    """Load the store for this invocation, exiting with status 1 on failure."""
    from folio.content.errors import ContentError
    from folio.content.store import load
    from folio.core.config import ConfigError

    try:
        root = ctx.site_root()
        return load(root, include_drafts=include_drafts)
    except (ContentError, ConfigError, FileNotFoundError, NotADirectoryError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1)


def _dump_json(data) -> None:
    click.echo(json_module.dumps(data, indent=2, default=str))


def _labels_str(doc: Document, limit: int = 4) -> str:
    labels = sorted(doc.labels)
    text = ", ".join(labels[:limit])
    if len(labels) > limit:
        text += f" +{len(labels) - limit}"
    return text


@click.group(name="content")
def content() -> None:
    """Validate and inspect posts and pages."""
    pass


@content.command(name="check")
@click.option("--drafts", "include_drafts", is_flag=True, help="Also validate drafts")
@click.pass_obj
def check(ctx, include_drafts: bool) -> None:
    """Load every document and report problems.

    Exits with status 1 on the first invalid or duplicate document.
    """
    store = _load_store(ctx, include_drafts=include_drafts)
    stats = store.stats()
    console.print(
        f"[green]OK[/green] {stats['documents']} document(s): "
        f"{stats['posts']} post(s), {stats['pages']} page(s)"
    )
    if include_drafts:
        console.print(f"[dim]{stats['drafts']} draft(s) included[/dim]")


@content.command(name="posts")
@click.option("-t", "--tag", multiple=True, help="Filter by tag (can repeat)")
@click.option("-c", "--category", multiple=True, help="Filter by category (can repeat)")
@click.option("-n", "--limit", type=int, default=None, help="Show at most N posts")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include drafts")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
@click.pass_obj
def list_posts(
    ctx,
    tag: tuple[str, ...],
    category: tuple[str, ...],
    limit: int | None,
    include_drafts: bool,
    as_json: bool,
) -> None:
    """List posts, newest first."""
    store = _load_store(ctx, include_drafts=include_drafts)
    posts = list(store.all_posts())

    if tag:
        tag_set = set(tag)
        posts = [p for p in posts if tag_set & p.tags]
    if category:
        cat_set = set(category)
        posts = [p for p in posts if cat_set & p.categories]
    if limit is not None:
        posts = posts[:limit]

    if as_json:
        _dump_json([p.to_dict() for p in posts])
        return

    if not posts:
        console.print("[yellow]No posts found matching criteria.[/yellow]")
        return

    table = Table(title=f"Posts ({len(posts)})")
    table.add_column("Date", style="cyan", width=12)
    table.add_column("Identifier", style="dim")
    table.add_column("Title", no_wrap=False)
    table.add_column("Labels", style="dim")

    for p in posts:
        title = escape(p.title)
        if p.draft:
            title += " [yellow](draft)[/yellow]"
        table.add_row(p.publication_date.isoformat(), p.identifier, title, _labels_str(p))

    console.print(table)


@content.command(name="pages")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include drafts")
@click.pass_obj
def list_pages(ctx, as_json: bool, include_drafts: bool) -> None:
    """List pages."""
    store = _load_store(ctx, include_drafts=include_drafts)
    pages = store.all_pages()

    if as_json:
        _dump_json([p.to_dict() for p in pages])
        return

    if not pages:
        console.print("[yellow]No pages found.[/yellow]")
        return

    table = Table(title=f"Pages ({len(pages)})")
    table.add_column("Identifier", style="cyan")
    table.add_column("Title", no_wrap=False)
    table.add_column("Layout", style="dim")
    table.add_column("Source", style="dim")

    for p in pages:
        table.add_row(p.identifier, escape(p.title), p.layout, p.source.as_posix())

    console.print(table)


@content.command(name="show")
@click.argument("identifier")
@click.option("--body", "show_body", is_flag=True, help="Print the body too")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include drafts")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show(ctx, identifier: str, show_body: bool, include_drafts: bool, as_json: bool) -> None:
    """Show one document by identifier."""
    store = _load_store(ctx, include_drafts=include_drafts)
    doc = store.find_by_identifier(identifier)

    if doc is None:
        console.print(f"[red]No document with identifier: {identifier}[/red]")
        raise SystemExit(1)

    if as_json:
        _dump_json(doc.to_dict(include_body=show_body))
        return

    console.print(f"[bold]{escape(doc.title)}[/bold]")
    console.print(f"  Identifier: {doc.identifier}")
    console.print(f"  Layout:     {doc.layout}")
    if doc.publication_date:
        console.print(f"  Date:       {doc.publication_date.isoformat()}")
    if doc.categories:
        console.print(f"  Categories: {', '.join(sorted(doc.categories))}")
    if doc.tags:
        console.print(f"  Tags:       {', '.join(sorted(doc.tags))}")
    if doc.draft:
        console.print("  [yellow]Draft[/yellow]")
    console.print(f"  [dim]{doc.source.as_posix()}[/dim]")

    if show_body:
        console.print()
        # Body may contain square brackets; print it without markup
        console.print(doc.body, markup=False, highlight=False)


@content.command(name="stats")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include drafts")
@click.pass_obj
def stats(ctx, as_json: bool, include_drafts: bool) -> None:
    """Show content statistics."""
    store = _load_store(ctx, include_drafts=include_drafts)
    data = store.stats()

    if as_json:
        _dump_json(data)
        return

    table = Table(title="Content Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in data.items():
        table.add_row(key.replace("_", " ").capitalize(), str(value if value is not None else "-"))
    console.print(table)

    by_year = store.posts_by_year()
    if by_year:
        console.print()
        for year, posts in by_year.items():
            console.print(f"  {year}: {len(posts)} post(s)")


@content.command(name="labels")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include drafts")
@click.pass_obj
def labels(ctx, as_json: bool, include_drafts: bool) -> None:
    """Show tag and category usage counts."""
    store = _load_store(ctx, include_drafts=include_drafts)
    tags = store.tag_counts()
    categories = store.category_counts()

    if as_json:
        _dump_json({"tags": dict(tags.most_common()), "categories": dict(categories.most_common())})
        return

    if not tags and not categories:
        console.print("[yellow]No tags or categories in use.[/yellow]")
        return

    for title, counts in (("Categories", categories), ("Tags", tags)):
        if not counts:
            continue
        table = Table(title=f"{title} ({len(counts)})")
        table.add_column("Label", style="cyan")
        table.add_column("Documents", justify="right")
        for label, count in counts.most_common():
            table.add_row(label, str(count))
        console.print(table)
