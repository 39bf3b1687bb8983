"""Command-line interface for PokeSnipe - title parsing, set matching and scans."""

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .arbitrage.diagnostics import ScanDiagnostics
from .arbitrage.engine import ArbitrageEngine
from .arbitrage.scanner import scan_source
from .catalog.client import CatalogClient
from .core.types import Deal, Listing, MatchResult, ParsedTitle
from .expansion.matcher import expansion_matcher
from .listing.condition import get_listing_condition
from .listing.source import StaticListingSource
from .parser.title_parser import parse_title
from .store.deal_store import InMemoryDealStore
from .utils.config import settings
from .utils.error_handler import ConfigurationError, ErrorContext, safe_execute
from .utils.log import configure_logging, get_logger

# Configure logging
configure_logging()
logger = get_logger(__name__)

# Rich console
console = Console()

app = typer.Typer(
    name="pokesnipe",
    help="PokeSnipe - find underpriced Pokemon card listings",
    add_completion=False,
)


def _parsed_table(parsed: ParsedTitle) -> Table:
    table = Table(title="Parsed Title", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    rows = [
        ("Card name", parsed.card_name),
        ("Card number", parsed.card_number),
        ("Printed number", parsed.printed_number),
        ("Set", parsed.set_name),
        ("Set code", parsed.set_code),
        ("Promo prefix", parsed.promo_prefix),
        ("Card type", parsed.card_type),
        ("Graded", f"{parsed.grading_company} {parsed.grade}{parsed.grade_modifier or ''}" if parsed.is_graded else "no"),
        ("Condition", parsed.condition),
        ("Variant", parsed.variant.variant_name),
        ("Language", f"{parsed.language} ({parsed.language_code})"),
        ("1st edition", "yes" if parsed.is_first_edition else "no"),
        ("Shadowless", "yes" if parsed.is_shadowless else "no"),
        ("Confidence", f"{parsed.confidence_score} ({parsed.confidence.value})"),
        ("Patterns", ", ".join(parsed.matched_patterns)),
    ]
    for field, value in rows:
        table.add_row(field, "-" if value in (None, "") else str(value))
    return table


@app.command()
def parse(title: str = typer.Argument(..., help="Listing title to parse")):
    """Parse a listing title and show the extracted attributes."""
    parsed = parse_title(title)
    console.print(_parsed_table(parsed))
    for warning in parsed.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")


def _match_table(result: MatchResult) -> Table:
    table = Table(title=f"Set match for '{result.query}'", show_header=True, header_style="bold magenta")
    table.add_column("", style="cyan")
    table.add_column("Expansion ID", style="green")
    table.add_column("Name", style="white")
    table.add_column("Printed total", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Match type", style="yellow")

    if result.match:
        m = result.match
        table.add_row("match", m.expansion.id, m.expansion.name, str(m.expansion.printed_total),
                      str(m.match_score), m.match_type)
    for alt in result.alternates:
        table.add_row("alternate", alt.expansion.id, alt.expansion.name, str(alt.expansion.printed_total),
                      str(alt.match_score), alt.match_type)
    return table


@app.command("match-set")
def match_set(
    set_name: str = typer.Argument(..., help="Set name as written in a listing"),
    number: Optional[str] = typer.Option(None, "--number", "-n", help="Card number hint"),
    promo: Optional[str] = typer.Option(None, "--promo", "-p", help="Promo prefix hint, e.g. SWSH"),
):
    """Resolve a set name to a canonical expansion."""
    result = expansion_matcher.match(set_name, number, promo)
    if not result.success and not result.alternates:
        console.print(f"[red]❌ No expansion matches '{set_name}'[/red]")
        raise typer.Exit(1)
    console.print(_match_table(result))
    if not result.success:
        console.print("[yellow]⚠ No confident match; showing near misses only[/yellow]")


def load_listings(path: Path) -> List[Listing]:
    """Read a JSON array of listings, filling in condition hints the source left out.

    Entries missing required fields are logged and skipped.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw: List[Dict[str, Any]] = json.load(f)
    if not isinstance(raw, list):
        raise ValueError("listings file must contain a JSON array")

    listings = []
    for index, entry in enumerate(raw):
        listing = safe_execute(
            Listing.from_dict,
            entry,
            context=ErrorContext(
                operation="load_listing",
                module="cli",
                function="load_listings",
                input_data={"index": index},
            ),
            logger=logger,
        )
        if listing is None:
            continue
        if listing.mapped_condition is None:
            condition = get_listing_condition(
                descriptors=entry.get("condition_descriptors"),
                aspects=entry.get("aspects"),
                title=listing.title,
                item_id=listing.item_id,
            )
            listing = replace(
                listing,
                mapped_condition=condition.condition,
                condition_source=condition.source,
                condition_blocked=listing.condition_blocked or condition.blocked,
                raw_condition=listing.raw_condition or condition.raw_value,
            )
        listings.append(listing)
    return listings


def _deals_table(deals: List[Deal]) -> Table:
    table = Table(title="Deals", show_header=True, header_style="bold magenta")
    table.add_column("Tier", style="bold")
    table.add_column("Card", style="cyan")
    table.add_column("Set", style="white")
    table.add_column("Cost £", justify="right")
    table.add_column("Market £", justify="right")
    table.add_column("Profit £", justify="right", style="green")
    table.add_column("Discount", justify="right")
    table.add_column("URL", style="blue")

    for deal in deals:
        table.add_row(
            deal.tier.value,
            f"{deal.card_name} #{deal.card_number}",
            deal.expansion_name,
            f"{deal.total_cost_gbp:.2f}",
            f"{deal.market_value_gbp:.2f}",
            f"{deal.profit_gbp:.2f}",
            f"{deal.discount_percent:.1f}%",
            deal.affiliate_url,
        )
    return table


def _diagnostics_table(diagnostics: ScanDiagnostics) -> Table:
    table = Table(title="Scan Diagnostics", show_header=True, header_style="bold magenta")
    table.add_column("Counter", style="cyan")
    table.add_column("Count", justify="right")

    for name, value in diagnostics.to_dict().items():
        table.add_row(name, str(value))
    for name, value in diagnostics.rates().items():
        table.add_row(name, f"{value:.1f}%")
    return table


async def _scan(
    listings: List[Listing],
    concurrency: int,
    query: str = "",
) -> Tuple[List[Deal], Optional[ScanDiagnostics]]:
    catalog = CatalogClient()
    deal_store = InMemoryDealStore()
    engine = ArbitrageEngine(catalog, deal_sink=deal_store, listing_source=StaticListingSource(listings))
    try:
        await expansion_matcher.initialize(catalog)
        await scan_source(engine, query, concurrency=concurrency)
    finally:
        await catalog.close()
    return deal_store.list_active(), engine.diagnostics.last_scan


@app.command()
def scan(
    listings_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON array of listings"),
    concurrency: int = typer.Option(settings.SCAN_CONCURRENCY, "--concurrency", "-c", help="Listings in flight"),
    query: str = typer.Option("", "--query", "-q", help="Only scan listings whose title contains these words"),
):
    """Price a batch of listings against the live catalog and report deals."""
    console.print(Panel.fit(
        "[bold blue]PokeSnipe - Scan[/bold blue]\n"
        "[dim]parse → match set → query catalog → price → deal[/dim]",
        border_style="blue",
    ))

    try:
        if not settings.has_catalog_credentials:
            raise ConfigurationError(
                "CATALOG_API_KEY is not set",
                {"hint": "add CATALOG_API_KEY (and CATALOG_TEAM_ID) to .env"},
            )

        listings = load_listings(listings_file)
        console.print(f"Loaded [bold]{len(listings)}[/bold] listings from {listings_file}")

        with console.status("[bold green]Scanning listings...", spinner="dots"):
            deals, diagnostics = asyncio.run(_scan(listings, concurrency, query=query))

        if deals:
            console.print(_deals_table(deals))
        else:
            console.print("[yellow]No deals found[/yellow]")
        if diagnostics is not None:
            console.print(_diagnostics_table(diagnostics))

    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(2)
    except (OSError, json.JSONDecodeError, KeyError, ValueError) as e:
        console.print(f"[red]❌ Could not read listings: {e}[/red]")
        logger.error("listings_load_failed", path=str(listings_file), error=str(e))
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
