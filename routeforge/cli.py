import logging
import traceback
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from routeforge.codegen.codegen import Codegen
from routeforge.config import DocumentConfig, RouteConfig, get_config
from routeforge.exceptions import RouteForgeError

console = Console()
app = typer.Typer(
    name='routeforge',
    help='Build a resolved route IR from OpenAPI documents',
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Show debug logging')
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Build and write the route IR of every configured document.

    If no config file is specified, will look for routeforge.yaml or
    routeforge.yml in the current directory, then for [tool.routeforge]
    in pyproject.toml.

    Examples:
        routeforge generate
        routeforge generate --config my-config.yaml
        routeforge generate -c config.json
    """
    try:
        config = get_config(config)

        for document_config in config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Building routes for {document_config.source}...', total=None
                )

                codegen = Codegen(document_config)
                collection = codegen.generate()
                path = codegen.write(collection)

                progress.update(
                    task, description=f'Route IR completed for {document_config.source}!'
                )
            console.print('[dim]Generated files:[/dim]')
            console.print(f'  - {path}')

        console.print('[green]Successfully generated route IR[/green]')

    except (RouteForgeError, FileNotFoundError) as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)
    except Exception as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        traceback.print_exc()
        raise typer.Exit(1)


@app.command()
def inspect(
    source: Annotated[str, typer.Argument(help='Path to an OpenAPI document')],
    module_first_tag: Annotated[
        bool,
        typer.Option(
            '--module-first-tag', help='Group routes by their first tag'
        ),
    ] = False,
) -> None:
    """Print the routes of a document as a table."""
    try:
        codegen = Codegen(
            DocumentConfig(
                source=source,
                routes=RouteConfig(module_name_first_tag=module_first_tag),
            )
        )
        collection = codegen.generate()
    except RouteForgeError as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        raise typer.Exit(1)

    table = Table(title=source)
    table.add_column('Module', style='cyan')
    table.add_column('Method', style='magenta')
    table.add_column('Path')
    table.add_column('Name', style='green')
    table.add_column('Response')

    for module_name, routes in [
        ('', collection.grouped.out_of_module),
        *((m.module_name, m.routes) for m in collection.grouped.combined),
    ]:
        for route in routes:
            table.add_row(
                module_name,
                route.method.upper(),
                escape(route.path),
                route.route_name.usage,
                escape(route.response.type),
            )

    console.print(table)
    console.print(f'[dim]{len(collection.routes)} routes[/dim]')


@app.command()
def version() -> None:
    """Show the version of routeforge."""
    from routeforge import __version__

    console.print(f'routeforge version: {__version__}')


if __name__ == '__main__':
    app()
