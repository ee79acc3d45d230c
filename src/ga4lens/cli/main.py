"""CLI for ga4lens."""

import json
from typing import Annotated

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from ga4lens.api.app import create_app
from ga4lens.config import Settings
from ga4lens.errors import GatewayError
from ga4lens.gateway import DEFAULT_TIMESERIES_METRIC, VIEWS, ReportGateway, describe_views
from ga4lens.log import configure_logging

app = typer.Typer(
    name="ga4lens",
    help="ga4lens - GA4 reporting gateway for dashboards",
    no_args_is_help=True,
)
console = Console()


def get_settings() -> Settings:
    return Settings()


def get_gateway(settings: Settings) -> ReportGateway:
    return ReportGateway.from_settings(settings)


def _load_gateway(settings: Settings) -> ReportGateway:
    try:
        gateway = get_gateway(settings)
        gateway.executor.connect()
    except Exception as e:
        console.print(f"[red]Error configuring gateway: {e}[/red]")
        raise typer.Exit(1)
    return gateway


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Interface to bind")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
) -> None:
    """Run the HTTP gateway."""
    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]Error loading settings: {e}[/red]")
        raise typer.Exit(1)

    configure_logging(settings.log_level)
    gateway = _load_gateway(settings)

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[green]GA4 API server running on :{bind_port}[/green]")
    uvicorn.run(
        create_app(gateway, settings),
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
    )


@app.command("views")
def list_views() -> None:
    """List the dashboard views and the fields they request."""
    table = Table(title="Views")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Dimensions", style="green")
    table.add_column("Metrics", style="yellow")

    for view in describe_views():
        metrics = ", ".join(view["metrics"])
        if view["sort_by"]:
            metrics = f"{metrics} (by {view['sort_by']})"
        table.add_row(view["name"], ", ".join(view["dimensions"]) or "-", metrics)

    console.print(table)


@app.command()
def view(
    name: Annotated[str, typer.Argument(help="View name: " + ", ".join(VIEWS))],
    start_date: Annotated[
        str | None, typer.Option("--start", help="Start date (YYYY-MM-DD)")
    ] = None,
    end_date: Annotated[str | None, typer.Option("--end", help="End date (YYYY-MM-DD)")] = None,
    metric: Annotated[
        str, typer.Option("--metric", "-m", help="Metric for the timeseries view")
    ] = DEFAULT_TIMESERIES_METRIC,
    limit: Annotated[
        str | None, typer.Option("--limit", "-l", help="Maximum rows for ranked views")
    ] = None,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: table, json")
    ] = "table",
) -> None:
    """Run one view and print the result."""
    if name not in VIEWS:
        console.print(f"[red]Unknown view: {name}. Use: {', '.join(VIEWS)}[/red]")
        raise typer.Exit(1)

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]Error loading settings: {e}[/red]")
        raise typer.Exit(1)
    gateway = _load_gateway(settings)

    try:
        if name == "overview":
            result = gateway.overview(start_date, end_date)
        elif name == "timeseries":
            result = gateway.timeseries(start_date, end_date, metric)
        elif name == "top-pages":
            result = gateway.top_pages(start_date, end_date, limit)
        elif name == "sources":
            result = gateway.sources(start_date, end_date, limit)
        else:
            result = gateway.devices(start_date, end_date)
    except GatewayError as e:
        console.print(f"[red]{VIEWS[name].tag}: {e}[/red]")
        raise typer.Exit(1)
    finally:
        gateway.close()

    _output_result(name, result.model_dump(by_alias=True), output)


def _output_result(name: str, payload: dict, output_format: str) -> None:
    """Output a view response in the specified format."""
    if output_format == "json":
        console.print(json.dumps(payload, indent=2, default=str))
        return

    date_range = payload["range"]
    title = f"{name} ({date_range['startDate']} to {date_range['endDate']})"

    if name == "overview":
        table = Table(title=title)
        table.add_column("KPI", style="cyan")
        table.add_column("Value", justify="right")
        for key, value in payload["kpis"].items():
            table.add_row(key, str(value))
        console.print(table)
        return

    rows = payload["rows"]
    if not rows:
        console.print(f"[yellow]No rows for {title}[/yellow]")
        return

    table = Table(title=title)
    columns = list(rows[0].keys())
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[str(row.get(c, "")) for c in columns])
    console.print(table)


if __name__ == "__main__":
    app()
