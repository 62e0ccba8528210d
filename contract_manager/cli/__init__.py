"""
Command Line Interface for Contract Manager.
"""

import asyncio
from typing import Optional

import typer
import uvicorn
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import get_settings
from ..db.base import drop_database, get_session_local, init_database
from ..enums import ContractStatus
from ..lifecycle import TRANSITIONS, is_terminal
from ..seed import seed as seed_database
from ..services.blueprints import BlueprintService
from ..services.contracts import ContractService

app = typer.Typer(help="Contract Manager - blueprints, contracts and their lifecycle")
console = Console()

STATUS_STYLES = {
    ContractStatus.CREATED.value: "white",
    ContractStatus.APPROVED.value: "cyan",
    ContractStatus.SENT.value: "blue",
    ContractStatus.SIGNED.value: "green",
    ContractStatus.LOCKED.value: "bold green",
    ContractStatus.REVOKED.value: "red",
}


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Start the API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    rprint(Panel.fit(f"Starting {settings.app_name} on http://{host}:{port}", style="bold blue"))
    uvicorn.run("contract_manager.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db():
    """Create all database tables."""
    asyncio.run(init_database())
    console.print("✅ Database initialized")


@app.command("reset-db")
def reset_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Drop every table and recreate an empty schema."""
    if not yes:
        typer.confirm("This deletes all blueprints, contracts and audit logs. Continue?", abort=True)
    asyncio.run(drop_database())
    asyncio.run(init_database())
    console.print("✅ Database reset")


@app.command()
def seed():
    """Load sample blueprints and contracts."""
    asyncio.run(init_database())
    db = get_session_local()()
    try:
        counts = seed_database(db)
    finally:
        db.close()
    console.print(
        f"✅ Seeded {counts['blueprints']} blueprints, "
        f"{counts['contracts']} contracts, {counts['transitions']} transitions"
    )


@app.command()
def transitions():
    """Show the contract lifecycle transition table."""
    table = Table(title="Contract Lifecycle", show_header=True, header_style="bold magenta")
    table.add_column("Status", style="cyan")
    table.add_column("Allowed next")
    table.add_column("Terminal")

    for status, successors in TRANSITIONS.items():
        table.add_row(
            status.value,
            ", ".join(s.value for s in successors) or "-",
            "yes" if is_terminal(status) else "",
        )

    console.print(table)


@app.command()
def blueprints():
    """List stored blueprints."""
    db = get_session_local()()
    try:
        service = BlueprintService(db)
        table = Table(title="Blueprints", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Fields", justify="right")
        table.add_column("Contracts", justify="right")

        for blueprint in service.list():
            table.add_row(
                blueprint.id,
                blueprint.name,
                str(len(blueprint.fields)),
                str(service.contract_count(blueprint.id)),
            )
    finally:
        db.close()

    console.print(table)


@app.command()
def contracts(
    status: Optional[ContractStatus] = typer.Option(None, help="Filter by status"),
):
    """List stored contracts."""
    db = get_session_local()()
    try:
        table = Table(title="Contracts", show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Blueprint")
        table.add_column("Status")

        for contract in ContractService(db).list(status=status.value if status else None):
            style = STATUS_STYLES.get(contract.status, "white")
            table.add_row(
                contract.id,
                contract.name,
                contract.blueprint.name,
                f"[{style}]{contract.status}[/{style}]",
            )
    finally:
        db.close()

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from .. import __version__
    rprint(Panel.fit(f"Contract Manager v{__version__}", style="bold green"))


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
