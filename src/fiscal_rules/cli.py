"""
Command-line interface for the nonprofit fiscal rules.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import FiscalConfig, generate_default_config, load_config
from .fiscal.currency import to_cents, to_euros
from .fiscal.donor_net import calculate_donor_net
from .fiscal.model182 import calculate_model182_totals
from .fiscal.remittance import RemittanceInvariantError, assert_sum_invariant
from .models.transaction import Model182Result, Transaction
from .parsers.transaction_parser import DonorCsvParser, TransactionCsvParser
from .reports.excel_generator import Model182ExcelReport
from .rules.net_amount import compute_net_amount, is_return_like
from .rules.splits import is_split_balanced, split_delta_cents
from .rules.visibility import filter_ledger
from .utils.exceptions import FiscalRulesError
from .utils.logging_config import level_from_name, setup_logging

console = Console()

MAX_ROWS = 50


def _load(config: Optional[Path], verbose: bool) -> FiscalConfig:
    fiscal_config = load_config(config)
    level = logging.DEBUG if verbose else level_from_name(fiscal_config.logging.level)
    setup_logging(level, log_format=fiscal_config.logging.format)
    return fiscal_config


def _fail(e: Exception, verbose: bool) -> None:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


def _money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


@click.group()
@click.version_option(version=__version__)
def main():
    """Fiscal rules for nonprofit transaction ledgers."""
    pass


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("--donor", help="Donor contact id for a donor net summary")
@click.option("--year", type=int, help="Fiscal year (with --donor)")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def net(
    transactions_file: Path,
    config: Optional[Path],
    donor: Optional[str],
    year: Optional[int],
    verbose: bool,
):
    """
    Show the net fiscal amount of each transaction.

    TRANSACTIONS_FILE: Path to the transactions CSV export
    """
    try:
        fiscal_config = _load(config, verbose)
        transactions = TransactionCsvParser(fiscal_config).parse_file(transactions_file)
    except FiscalRulesError as e:
        _fail(e, verbose)
        return

    if donor:
        if year is None:
            raise click.UsageError("--year is required with --donor")
        _display_donor_net(transactions, donor, year)
        return

    table = Table(title=f"Net Amounts: {transactions_file.name}")
    table.add_column("ID")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Amount", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Return")

    total = Decimal("0")
    for txn in transactions:
        total += compute_net_amount(txn)

    for txn in transactions[:MAX_ROWS]:
        table.add_row(
            txn.id or "-",
            str(txn.date),
            str(getattr(txn.transaction_type, "value", txn.transaction_type)),
            _money(txn.amount),
            _money(compute_net_amount(txn)),
            "yes" if is_return_like(txn) else "",
        )

    console.print(table)
    if len(transactions) > MAX_ROWS:
        console.print(f"\n... and {len(transactions) - MAX_ROWS} more transactions")
    console.print(f"\nNet fiscal total: {_money(total)}")


def _display_donor_net(transactions: list[Transaction], donor: str, year: int) -> None:
    result = calculate_donor_net(transactions, donor, year)
    euros = result.as_euros()

    table = Table(title=f"Donor {donor} - {year}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Donations", str(result.donations_count))
    table.add_row("Gross Donations", _money(euros["gross_donations"]))
    table.add_row("Returns", str(result.returns_count))
    table.add_row("Returned", _money(euros["returns"]))
    table.add_row("Net", _money(euros["net"]))
    console.print(table)


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--show-archived/--hide-archived",
    default=None,
    help="Include archived transactions (defaults to rules.show_archived)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def ledger(
    transactions_file: Path,
    config: Optional[Path],
    show_archived: Optional[bool],
    verbose: bool,
):
    """
    List the transactions visible in the primary ledger.

    TRANSACTIONS_FILE: Path to the transactions CSV export
    """
    try:
        fiscal_config = _load(config, verbose)
        transactions = TransactionCsvParser(fiscal_config).parse_file(transactions_file)
    except FiscalRulesError as e:
        _fail(e, verbose)
        return

    if show_archived is None:
        show_archived = fiscal_config.rules.show_archived
    visible = filter_ledger(transactions, show_archived=show_archived)

    table = Table(title=f"Ledger: {transactions_file.name}")
    table.add_column("ID")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    table.add_column("Source")
    table.add_column("Flags")

    for txn in visible[:MAX_ROWS]:
        flags = []
        if txn.is_remittance:
            flags.append("remittance")
        if txn.is_split:
            flags.append("split")
        if txn.is_archived:
            flags.append("archived")
        table.add_row(
            txn.id or "-",
            str(txn.date),
            _money(txn.amount),
            txn.source or "-",
            ", ".join(flags),
        )

    console.print(table)
    console.print(f"\nVisible: {len(visible)} of {len(transactions)} transactions")


@main.command("check-split")
@click.argument("parent", type=str)
@click.argument("lines", nargs=-1, required=True, type=str)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--tolerance-cents",
    type=click.IntRange(min=0),
    default=None,
    help="Override the split tolerance in cents",
)
def check_split(
    parent: str,
    lines: tuple[str, ...],
    config: Optional[Path],
    tolerance_cents: Optional[int],
):
    """
    Check that split lines add up to the parent amount.

    PARENT: Parent amount (e.g. 10.00)
    LINES: Split line amounts
    """
    try:
        fiscal_config = load_config(config)
    except FiscalRulesError as e:
        _fail(e, False)
        return

    if tolerance_cents is None:
        tolerance_cents = fiscal_config.rules.split_tolerance_cents

    try:
        parent_cents = to_cents(parent)
        line_cents = [to_cents(line) for line in lines]
    except ArithmeticError:
        raise click.BadParameter("amounts must be decimal numbers")

    delta = split_delta_cents(parent_cents, line_cents)
    balanced = is_split_balanced(parent_cents, line_cents, tolerance_cents)

    console.print(f"Parent: {_money(to_euros(parent_cents))}")
    console.print(f"Lines:  {_money(to_euros(sum(line_cents)))} ({len(line_cents)} lines)")
    console.print(f"Delta:  {delta} cents (tolerance {tolerance_cents})")

    if balanced:
        console.print("[green]Balanced[/green]")
    else:
        console.print("[red]Unbalanced[/red]")
        sys.exit(1)


@main.command("check-remittance")
@click.argument("parent", type=str)
@click.argument("children", nargs=-1, required=True, type=str)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def check_remittance(parent: str, children: tuple[str, ...], config: Optional[Path]):
    """
    Check that remittance children add up to the bank parent amount.

    PARENT: Parent (bank) amount
    CHILDREN: Child amounts, one per donor line
    """
    try:
        fiscal_config = load_config(config)
    except FiscalRulesError as e:
        _fail(e, False)
        return

    try:
        parent_cents = to_cents(parent)
        children_cents = [to_cents(child) for child in children]
    except ArithmeticError:
        raise click.BadParameter("amounts must be decimal numbers")

    try:
        assert_sum_invariant(
            parent_cents,
            sum(children_cents),
            tolerance_cents=fiscal_config.rules.remittance_sum_tolerance_cents,
        )
    except RemittanceInvariantError as e:
        _fail(e, False)
        return

    console.print(
        f"[green]Remittance balanced: {len(children_cents)} children, "
        f"{_money(to_euros(sum(children_cents)))}[/green]"
    )


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.argument("donors_file", type=click.Path(exists=True, path_type=Path))
@click.option("--year", type=int, required=True, help="Fiscal year to declare")
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--dry-run", is_flag=True, help="Show the summary without writing a report")
def model182(
    transactions_file: Path,
    donors_file: Path,
    year: int,
    config: Optional[Path],
    output: Optional[Path],
    verbose: bool,
    dry_run: bool,
):
    """
    Calculate Model 182 donor totals and write the Excel report.

    TRANSACTIONS_FILE: Path to the transactions CSV export
    DONORS_FILE: Path to the donors CSV export
    """
    try:
        fiscal_config = _load(config, verbose)
        transactions = TransactionCsvParser(fiscal_config).parse_file(transactions_file)
        donors = DonorCsvParser(fiscal_config).parse_file(donors_file)

        result = calculate_model182_totals(transactions, donors, year)
        _display_model182(result)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        report = Model182ExcelReport(fiscal_config)
        if output is None:
            output = report.default_output_path(year)
        report_path = report.generate_report(result, output)

        console.print(f"\n[green]Report generated: {report_path}[/green]")

    except FiscalRulesError as e:
        _fail(e, verbose)


def _display_model182(result: Model182Result) -> None:
    """Display Model 182 donor rows and totals."""
    table = Table(title=f"Model 182 - {result.year}")
    table.add_column("Tax ID")
    table.add_column("Name")
    table.add_column("Total", justify="right")
    table.add_column("Returned", justify="right")
    table.add_column("Recurrent")

    for row in result.donor_totals[:MAX_ROWS]:
        table.add_row(
            row.donor.tax_id,
            row.donor.name,
            _money(row.total_amount),
            _money(row.returned_amount),
            "yes" if row.recurrent else "",
        )

    console.print(table)
    console.print(
        f"\nDonors: {result.stats.total_donors}  "
        f"Total: {_money(result.stats.total_amount)}  "
        f"Returns excluded: {result.stats.excluded_returns}"
    )


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


if __name__ == "__main__":
    main()
