import typer
from rich.console import Console

from code_helper.errors import ConfigError

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 5000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from code_helper.api.app import create_app
    from code_helper.config import load_settings

    try:
        settings = load_settings()
        app = create_app(settings)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from code_helper.config import load_settings
    from code_helper.llm.factory import completion_options, create_completion_client
    from code_helper.mcp.server import create_mcp_server

    try:
        settings = load_settings()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    server = create_mcp_server(
        create_completion_client(settings), completion_options(settings), settings.max_code_length
    )
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]


@serve_app.callback(invoke_without_command=True)
def serve_all(
    ctx: typer.Context,
    host: str = "0.0.0.0",
    port: int = 5000,
) -> None:
    """Start all servers (API + MCP over SSE)."""
    if ctx.invoked_subcommand is not None:
        return

    import threading

    import uvicorn

    from code_helper.api.app import create_app
    from code_helper.config import load_settings
    from code_helper.llm.factory import completion_options, create_completion_client
    from code_helper.mcp.server import create_mcp_server

    try:
        settings = load_settings()
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc

    # Each server runs its own event loop, so each gets its own HTTP client.
    api_app = create_app(settings)
    mcp_server = create_mcp_server(
        create_completion_client(settings), completion_options(settings), settings.max_code_length
    )
    mcp_port = port + 1

    threads = [
        threading.Thread(
            target=uvicorn.run,
            kwargs={"app": api_app, "host": host, "port": port, "log_level": settings.log_level.lower()},
            daemon=True,
        ),
        threading.Thread(
            target=mcp_server.run,
            kwargs={"transport": "sse", "host": host, "port": mcp_port},
            daemon=True,
        ),
    ]

    console.print(f"[green]Starting all servers on {host}[/green]")
    console.print(f"  API:       http://{host}:{port}")
    console.print(f"  MCP (SSE): http://{host}:{mcp_port}")

    for t in threads:
        t.start()
    for t in threads:
        t.join()
