"""CLI interface for Standard Scout."""

import asyncio
import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .analyzer import StandardAnalyzer
from .catalog import NETWORKS, STANDARDS
from .config import Config
from .errors import ScoutError, describe_error
from .history import HistoryLog, JSONHistoryStore
from .models import AnalysisReport, BytecodeRule, ClassificationMode

app = typer.Typer(
    name="standard-scout",
    help="Detect which ERC standards an on-chain contract implements",
)
console = Console()


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def shorten_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def load_history(config: Config) -> HistoryLog:
    return HistoryLog.load(JSONHistoryStore(config.history_file))


@app.command()
def analyze(
    address: str = typer.Argument(..., help="Contract address to analyze"),
    network: Optional[str] = typer.Option(None, help="Network key (ethereum, polygon, arbitrum, optimism, base, bsc)"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Analyze a contract for supported standards."""
    setup_logging(verbose)
    address = address.strip()

    config = Config()
    network_key = network or config.default_network
    analyzer = StandardAnalyzer(config, history=load_history(config))

    if not as_json:
        console.print(f"[bold green]🔍 Analyzing contract[/bold green]")
        console.print(f"Address: {address}")
        console.print(f"Network: {network_key}")

    try:
        report = asyncio.run(analyzer.analyze(address, network_key))
    except ScoutError as e:
        console.print(f"[red]{describe_error(e)}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(report.to_dict()))
        return

    _print_report(report, config)


def _print_report(report: AnalysisReport, config: Config):
    facts = report.contract_facts
    profile = config.network(report.network_key)

    console.print()
    console.print("[bold]Contract Info[/bold]")
    console.print(f"  Code size: {facts.bytecode_byte_length:,} bytes")
    console.print(f"  Balance: {facts.native_balance:.4f} ETH")
    console.print(f"  Explorer: {profile.explorer_address_url(report.address)}")

    console.print()
    console.print(
        f"[bold]Detected {report.detected_count}/{len(report.outcomes)} standards[/bold] "
        f"({report.coverage:.0f}% coverage, {len(report.detected_categories)} categories)"
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Standard")
    table.add_column("Category")
    table.add_column("Method")
    table.add_column("Status")
    table.add_column("Details")

    for outcome in report.outcomes:
        standard = outcome.standard
        status = "[green]✓ Detected[/green]" if outcome.detected else "[dim]✗ Not found[/dim]"

        if standard.mode == ClassificationMode.BYTECODE_HEURISTIC:
            method = "bytecode"
            matched = len(outcome.matched_signatures or ())
            details = f"{matched}/{outcome.total_signatures} selectors ({outcome.match_ratio or 0:.0f}%)"
        else:
            method = "ERC-165"
            details = f"[yellow]{escape(outcome.probe_failure_reason[:60])}[/yellow]" if outcome.probe_failure_reason else ""

        table.add_row(standard.name, standard.category, method, status, details)

    console.print(table)


@app.command()
def networks():
    """List supported networks."""
    config = Config()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Chain ID")
    table.add_column("Primary RPC")
    table.add_column("Fallback RPC")

    for key in NETWORKS:
        profile = config.network(key)
        table.add_row(
            key,
            profile.name,
            str(profile.chain_id),
            profile.primary_endpoint,
            profile.secondary_endpoint or "-",
        )

    console.print(table)


@app.command()
def standards():
    """List the standards checked by every analysis."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Standard")
    table.add_column("Category")
    table.add_column("Detection")
    table.add_column("Description")

    for standard in STANDARDS:
        rule = standard.rule
        if isinstance(rule, BytecodeRule):
            detection = f"{len(rule.signatures)} selectors, ≥{rule.required_match_ratio:g}%"
        else:
            detection = f"supportsInterface({rule.interface_id})"

        table.add_row(standard.name, standard.category, detection, standard.description)

    console.print(table)


@app.command()
def history(
    limit: int = typer.Option(5, help="Max entries to show"),
):
    """Show recent analyses."""
    config = Config()
    entries = load_history(config).entries()[:limit]

    if not entries:
        console.print("[yellow]No analyses yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Address")
    table.add_column("Network")
    table.add_column("Standards")
    table.add_column("When")

    for entry in entries:
        profile = NETWORKS.get(entry.network_key)
        table.add_row(
            shorten_address(entry.address),
            profile.name if profile else entry.network_key,
            str(entry.detected_count),
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def check():
    """Validate configuration."""
    issues = Config().validate()
    if issues:
        for issue in issues:
            console.print(f"[red]✗ {issue}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✓ Configuration OK[/green]")


if __name__ == "__main__":
    app()
