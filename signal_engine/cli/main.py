"""
Signal Engine - Command Line Interface

Scores daily price files against a strategy without starting a bot.

Usage:
    signal-engine AAPL --data-dir ./prices
    signal-engine AAPL MSFT --strategy strategy.json --format json
    signal-engine AAPL --sentiment-score 72 --article-count 12 --label bullish
    signal-engine AAPL --replay --start 2024-01-02

Price files are read from <data-dir>/<SYMBOL>.csv with a date column followed
by open, high, low, close and volume columns.
"""

import argparse
import asyncio
import json
import sys
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from ..config.settings import Settings
from ..config.strategy import StrategyConfig
from ..data.providers.csv_provider import (
    CsvPriceHistoryProvider,
    StaticFundamentalProvider,
    StaticSentimentProvider,
)
from ..signal_generation.core import FundamentalData, SentimentData
from ..utils.logging import configure_logging
from .analyzer import SymbolAnalyzer
from .formatter import OutputFormatter, console

formatter = OutputFormatter()

VERBOSITY_LEVELS = {0: "ERROR", 1: "WARNING", 2: "INFO", 3: "DEBUG"}


def parse_arguments(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    settings = settings or Settings()
    parser = argparse.ArgumentParser(
        prog="signal-engine",
        description="Score price history into buy/sell/hold signals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s AAPL                                   # Evaluate the latest bar
  %(prog)s AAPL MSFT --format json                # JSON output
  %(prog)s AAPL --strategy strategy.json          # Custom strategy thresholds
  %(prog)s AAPL --sentiment-score 72 --article-count 12 --label bullish
  %(prog)s AAPL --replay --start 2024-01-02       # Bar-by-bar replay
        """,
    )

    parser.add_argument("symbols", nargs="+", help="Symbols to evaluate (e.g., AAPL MSFT)")
    parser.add_argument(
        "--data-dir",
        default=settings.DATA_DIR,
        help=f"Directory holding <SYMBOL>.csv price files (default: {settings.DATA_DIR})",
    )
    parser.add_argument(
        "--strategy",
        default=settings.STRATEGY_FILE,
        help="JSON strategy definition (default: built-in strategy defaults)",
    )
    parser.add_argument(
        "--fundamentals",
        help="JSON file mapping symbol to fundamental metrics (pe_ratio, eps, ...)",
    )
    parser.add_argument("--sentiment-score", type=float, help="News sentiment score (0-100) applied to every symbol")
    parser.add_argument("--article-count", type=int, default=0, help="Article count behind --sentiment-score")
    parser.add_argument("--label", default="neutral", help="Sentiment label behind --sentiment-score")
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format (default: table)")
    parser.add_argument("--output", "-o", help="Save JSON output to file")
    parser.add_argument("--replay", action="store_true", help="Evaluate every bar instead of only the latest")
    parser.add_argument("--start", type=date.fromisoformat, help="First date to emit in replay mode (YYYY-MM-DD)")
    parser.add_argument(
        "--verbose",
        "-v",
        nargs="?",
        const=2,
        type=int,
        choices=[0, 1, 2, 3],
        default=None,
        help="Verbosity level: 0=errors-only, 1=warnings, 2=detailed, 3=debug",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    return parser.parse_args(argv)


def load_strategy(args: argparse.Namespace) -> StrategyConfig:
    """Load the strategy and switch sentiment on when a sentiment score was given."""
    strategy = StrategyConfig.from_json_file(args.strategy) if args.strategy else StrategyConfig()
    if args.sentiment_score is not None and not strategy.sentiment.enabled:
        strategy = strategy.model_copy(
            update={"sentiment": strategy.sentiment.model_copy(update={"enabled": True})}
        )
    return strategy


def load_fundamentals(path: Optional[str]) -> Optional[StaticFundamentalProvider]:
    if not path:
        return None
    with open(path, "r") as f:
        raw = json.load(f)
    return StaticFundamentalProvider({symbol: FundamentalData(**metrics) for symbol, metrics in raw.items()})


async def run(args: argparse.Namespace) -> int:
    """Evaluate every requested symbol and print the results; returns the exit code."""
    strategy = load_strategy(args)
    symbols = [s.upper() for s in args.symbols]

    sentiment_provider = None
    if args.sentiment_score is not None:
        datum = SentimentData(score=args.sentiment_score, label=args.label, article_count=args.article_count)
        sentiment_provider = StaticSentimentProvider({symbol: datum for symbol in symbols})

    analyzer = SymbolAnalyzer(
        strategy,
        CsvPriceHistoryProvider(args.data_dir),
        sentiment_provider=sentiment_provider,
        fundamental_provider=load_fundamentals(args.fundamentals),
    )

    if args.replay:
        results = [await analyzer.replay_symbol(symbol, args.start) for symbol in symbols]
    else:
        results = [await analyzer.analyze_symbol(symbol) for symbol in symbols]

    if args.format == "json":
        console.print_json(formatter.format_json(results))
    elif args.replay:
        for result in results:
            formatter.format_replay_table(result)
    else:
        formatter.format_table(results, detailed=(args.verbose or 0) >= 2)

    if args.output:
        with open(args.output, "w") as f:
            f.write(formatter.format_json(results))
        formatter.print_success(f"Results saved to {args.output}")

    return 1 if any("error" in result for result in results) else 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    load_dotenv()
    settings = Settings()
    args = parse_arguments(argv, settings)

    level = VERBOSITY_LEVELS[args.verbose] if args.verbose is not None else settings.LOG_LEVEL
    configure_logging(level, json_output=settings.LOG_JSON)

    if args.no_color:
        console.no_color = True

    try:
        exit_code = asyncio.run(run(args))
    except ValidationError as e:
        formatter.print_error(f"Invalid strategy: {e}")
        exit_code = 2
    except (OSError, json.JSONDecodeError, TypeError) as e:
        formatter.print_error(f"Error: {e}")
        exit_code = 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        exit_code = 130

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
