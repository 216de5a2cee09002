import functools

import rich_click as click
from rich.console import Console
from rich.table import Table
from yaspin import yaspin

import ao3_scraper.api.exceptions
from ao3_scraper.api import AO3ApiClient
from ao3_scraper.api.enums import SANITIZATION_POLICY_VALUES, WORK_SORT_OPTION_VALUES
from ao3_scraper.api.models import WorkList
from ao3_scraper.utils import serialize_sanitization_policy, serialize_sort_by

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

console = Console()

base_api = AO3ApiClient()


def create_option_group(options):
    return [
        options,
        {
            "name": "Output Options",
            "options": [
                "--json",
                "--sanitize",
            ],
        },
        {
            "name": "Advanced Options",
            "options": [
                "--timeout",
                "--output-dir",
            ],
        },
        {
            "name": "Debug Options",
            "options": [
                "--debug",
                "--debug-cache",
            ],
        },
    ]


click.rich_click.USE_RICH_MARKUP = True
click.rich_click.OPTION_GROUPS = {
    "ao3-scraper tag": create_option_group(
        {
            "name": "Tag Options",
            "options": [
                "--page",
                "--end-page",
                "--sort-by",
            ],
            "panel_styles": {
                "border_style": "white",
            },
        }
    ),
    "ao3-scraper user": create_option_group(
        {
            "name": "User Options",
            "options": [
                "--page",
            ],
            "panel_styles": {
                "border_style": "white",
            },
        }
    ),
    "ao3-scraper work": create_option_group(
        {
            "name": "Work Options",
            "options": [
                "--download",
            ],
            "panel_styles": {
                "border_style": "white",
            },
        }
    ),
}


def api_command(func):
    @cli.command()
    @click.pass_context
    @click.option(
        "--json/--no-json",
        "as_json",
        default=False,
        show_default=True,
        help="Print the results as JSON",
    )
    @click.option(
        "--sanitize",
        "sanitization_policy",
        type=click.Choice(SANITIZATION_POLICY_VALUES),
        default=base_api.SANITIZATION_POLICY,
        show_default=True,
        help="HTML sanitization policy for summaries, notes and descriptions",
    )
    @click.option(
        "--timeout",
        "timeout",
        type=float,
        default=base_api.TIMEOUT,
        show_default=True,
        help="Request timeout, in seconds",
    )
    @click.option(
        "--output-dir",
        "output_dir",
        type=click.Path(file_okay=False, writable=True),
        default=base_api.OUTPUT_FOLDER,
        show_default=True,
        help="Directory to save output",
    )
    @click.option(
        "--debug/--no-debug",
        "debug",
        default=base_api.DEBUG,
        show_default=True,
        help="Enable debug mode",
    )
    @click.option(
        "--debug-cache/--no-debug-cache",
        "use_debug_cache",
        default=base_api.USE_DEBUG_CACHE,
        show_default=True,
        help="Enable or disable the debug cache",
    )
    @functools.wraps(func)
    def wrapper(ctx, **kwargs):
        api = AO3ApiClient(
            SANITIZATION_POLICY=serialize_sanitization_policy(kwargs.pop("sanitization_policy")).value,
            TIMEOUT=kwargs.pop("timeout"),
            OUTPUT_FOLDER=kwargs.pop("output_dir"),
            DEBUG=kwargs.pop("debug"),
            USE_DEBUG_CACHE=kwargs.pop("use_debug_cache"),
        )
        as_json = kwargs.pop("as_json")

        with yaspin(text="Fetching from AO3\r", color="yellow") as spinner:
            try:
                result = func(ctx, api, **kwargs)
                spinner.color = "green"
                spinner.ok("✔")
            except Exception as e:
                is_ao3_exception = isinstance(e, ao3_scraper.api.exceptions.AO3Exception)
                spinner.color = "red"
                spinner.fail("✘")
                if is_ao3_exception:
                    click.secho(e.args[0], fg="red", color=True, bold=True)
                else:
                    click.secho("An error occurred while fetching from AO3", fg="red", color=True, bold=True)
                api._debug_error(e)
                ctx.exit(1)

        if as_json:
            if isinstance(result, list):
                click.echo("[" + ",".join(item.model_dump_json() for item in result) + "]")
            else:
                click.echo(result.model_dump_json(indent=2))
        else:
            console.print(render_table(result))

    return wrapper


def render_table(result):
    """
    Renders a result as a rich Table
    """

    if isinstance(result, WorkList):
        title = f"{result.count} works"
        if result.pagination.is_paginated:
            title += f" (page {result.pagination.current_page} of {result.pagination.last_page})"
        return _works_table(title, result.works)

    table = Table(title_justify="left", title_style="bold", show_lines=False, expand=True)
    items = result if isinstance(result, list) else [result]
    if not items:
        table.title = "No results"
        return table

    columns = list(items[0].model_fields.keys())
    for column in columns:
        table.add_column(column)
    for item in items:
        table.add_row(*[_format_value(getattr(item, column)) for column in columns])
    return table


def _works_table(title, works):
    table = Table(title=title, title_justify="left", title_style="bold", show_lines=False, expand=True)
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Authors")
    table.add_column("Fandoms")
    table.add_column("Words", justify="right")
    table.add_column("Chapters", justify="right")
    table.add_column("Kudos", justify="right")
    for work in works:
        table.add_row(
            work.slug,
            work.title,
            "Anonymous" if work.is_anonymous else ", ".join(author.text for author in work.authors),
            ", ".join(fandom.text for fandom in work.fandom_tags),
            f"{work.words:,}",
            work.chapters,
            f"{work.kudos:,}",
        )
    return table


def _format_value(value):
    if isinstance(value, list):
        return ", ".join(getattr(item, "text", None) or getattr(item, "title", str(item)) for item in value)
    if hasattr(value, "text"):
        return value.text
    return str(value)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.pass_context
def cli(ctx):
    """
    Scrape the Archive of Our Own
    """
    ctx.ensure_object(dict)
    return


@api_command
def categories(ctx, api):
    """
    List AO3 media categories
    """
    return api.fandoms.fetch_categories()


@api_command
@click.argument("category", type=str)
def fandoms(ctx, api, category):
    """
    List the fandoms under a media category
    """
    return api.fandoms.fetch_category(category)


@api_command
@click.argument("tag", type=str)
@click.option(
    "--page",
    "page",
    type=int,
    default=1,
    show_default=True,
    help="Page number",
)
@click.option(
    "--end-page",
    "end_page",
    type=int,
    default=None,
    show_default=True,
    help="End page number. Fetches a single page when not set",
)
@click.option(
    "--sort-by",
    "sort_by",
    type=click.Choice(WORK_SORT_OPTION_VALUES),
    default=None,
    show_default=True,
    help="Sort works by",
)
def tag(ctx, api, tag, page, end_page, sort_by):
    """
    List the works tagged with a tag
    """
    sort_option = serialize_sort_by(sort_by)
    if end_page is None:
        return api.tags.fetch_works(tag, page=page, sort_by=sort_option)
    return api.tags.fetch_pages(tag, start_page=page, end_page=end_page, sort_by=sort_option)


@api_command
@click.argument("username", type=str)
@click.option(
    "--page",
    "page",
    type=int,
    default=1,
    show_default=True,
    help="Page number",
)
def user(ctx, api, username, page):
    """
    List the works posted by a user
    """
    return api.users.fetch_works(username, page=page)


@api_command
@click.argument("work_id", type=str)
@click.option(
    "--download/--no-download",
    "download",
    default=False,
    show_default=True,
    help="Download the HTML file of the work",
)
def work(ctx, api, work_id, download):
    """
    Show an AO3 work
    """
    work = api.works.fetch(work_id)
    if download:
        filepath = api.works.download_html(work_id, work=work)
        api._log(f"Saved to {filepath}")
    return work


@api_command
@click.argument("series_id", type=str)
def series(ctx, api, series_id):
    """
    Show an AO3 series
    """
    return api.series.fetch(series_id)


if __name__ == "__main__":
    cli()
