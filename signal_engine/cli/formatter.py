"""
Output formatting for different display modes.
"""
import json
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


class OutputFormatter:
    """Format evaluation results for display."""

    @staticmethod
    def _color_code_action(action: str) -> str:
        """Apply color coding to actions."""
        if action == "buy":
            return "[green]BUY[/green]"
        elif action == "sell":
            return "[red]SELL[/red]"
        elif action == "hold":
            return "[yellow]HOLD[/yellow]"
        return f"[dim]{escape(action.upper())}[/dim]"

    @staticmethod
    def _category_cell(signal: Dict[str, Any]) -> str:
        if signal is None:
            return "[dim]-[/dim]"
        if not signal.get("has_data", True):
            return "[dim]no data[/dim]"
        return f"{OutputFormatter._color_code_action(signal['action'])} {signal['score']:.1f}"

    @staticmethod
    def format_table(results: List[Dict[str, Any]], detailed: bool = False) -> None:
        """
        Format latest-bar evaluations as a rich table with colors.

        Args:
            results: List of analysis results
            detailed: Print the combined reasons for each symbol below the table
        """
        if not results:
            console.print("[yellow]No results to display[/yellow]")
            return

        table = Table(title="Signal Evaluation", show_header=True, header_style="bold magenta")
        table.add_column("Symbol", style="cyan", no_wrap=True)
        table.add_column("Date", no_wrap=True)
        table.add_column("Action", no_wrap=True)
        table.add_column("Score", justify="right")
        table.add_column("Technical", no_wrap=True)
        table.add_column("Fundamental", no_wrap=True)
        table.add_column("Sentiment", no_wrap=True)

        for result in results:
            if "error" in result:
                error = result["error"]
                table.add_row(
                    result["symbol"], "-", "[red]ERROR[/red]", "-",
                    escape(error[:50] + "..." if len(error) > 50 else error), "", "",
                )
                continue

            evaluation = result["evaluation"]
            combined = evaluation["combined"]
            table.add_row(
                result["symbol"],
                evaluation["date"] or "-",
                OutputFormatter._color_code_action(combined["action"]),
                f"{combined['score']:.1f}",
                OutputFormatter._category_cell(evaluation["technical"]),
                OutputFormatter._category_cell(evaluation["fundamental"]),
                OutputFormatter._category_cell(evaluation["sentiment"]),
            )

        console.print(table)

        if detailed:
            for result in results:
                if "error" in result:
                    continue
                combined = result["evaluation"]["combined"]
                body = "\n".join(escape(reason) for reason in combined["reasons"])
                console.print(Panel(body, title=f"{result['symbol']} reasons", border_style="blue"))

    @staticmethod
    def format_replay_table(result: Dict[str, Any]) -> None:
        """Format a bar-by-bar replay for one symbol."""
        if "error" in result:
            OutputFormatter.print_error(f"{result['symbol']}: {result['error']}")
            return

        table = Table(title=f"{result['symbol']} replay", show_header=True, header_style="bold magenta")
        table.add_column("Date", no_wrap=True)
        table.add_column("Action", no_wrap=True)
        table.add_column("Score", justify="right")
        table.add_column("Technical", no_wrap=True)
        table.add_column("Buy/Sell votes", justify="right")

        for evaluation in result["evaluations"]:
            combined = evaluation["combined"]
            table.add_row(
                evaluation["date"] or "-",
                OutputFormatter._color_code_action(combined["action"]),
                f"{combined['score']:.1f}",
                OutputFormatter._category_cell(evaluation["technical"]),
                f"{combined['buy_signals']}/{combined['sell_signals']}",
            )

        console.print(table)

    @staticmethod
    def format_json(results: List[Dict[str, Any]]) -> str:
        """
        Format results as JSON.

        Args:
            results: List of analysis results

        Returns:
            JSON string
        """
        if len(results) == 1:
            return json.dumps(results[0], indent=2)
        return json.dumps(results, indent=2)

    @staticmethod
    def print_progress(message: str) -> None:
        """Print a progress message."""
        err_console.print(f"[*] {message}", style="dim", markup=False)

    @staticmethod
    def print_success(message: str) -> None:
        """Print a success message."""
        err_console.print(f"[OK] {message}", style="green", markup=False)

    @staticmethod
    def print_error(message: str) -> None:
        """Print an error message."""
        err_console.print(f"[ERROR] {message}", style="red bold", markup=False)

    @staticmethod
    def print_warning(message: str) -> None:
        """Print a warning message."""
        err_console.print(f"[WARN] {message}", style="yellow", markup=False)
