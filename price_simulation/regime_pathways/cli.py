"""Command-line interface for the market-regime price simulator.

Orchestrates config loading, activity level resolution, simulation execution,
report rendering and artifact generation.
"""

import argparse
import json
import sys

import structlog
import yaml
from pydantic import ValidationError

from regime_pathways.config.loader import default_config, load_config
from regime_pathways.config.settings import SimulatorSettings
from regime_pathways.data.interfaces import ActivityLevelProvider
from regime_pathways.data.sources.config_source import ConfigActivityLevelProvider
from regime_pathways.engine.expected import project_fixed_growth
from regime_pathways.engine.simulator import run_activity_levels
from regime_pathways.logging_config import configure_logging
from regime_pathways.model import get_model
from regime_pathways.model.regimes import ActivityLevelError
from regime_pathways.report.artifacts import build_payload, write_artifacts
from regime_pathways.report.console import render_report

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="price-sim",
        description="Simulate opinion prices over N trades across market activity levels",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--starting-price",
        type=float,
        help="Starting price in USDC smallest units, 6 decimals (overrides config default)",
    )
    parser.add_argument(
        "--trades",
        type=int,
        help="Number of trades per path (overrides config default)",
    )
    parser.add_argument(
        "--N",
        type=int,
        help="Number of Monte Carlo paths per activity level (overrides config default)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility (overrides config default)",
    )
    parser.add_argument(
        "--activity",
        action="append",
        help="Activity level name or alias; repeat for several (default: all)",
    )
    parser.add_argument(
        "--growth-rates",
        type=float,
        nargs="*",
        help="Fixed per-trade growth rates in percent to compare against",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in activity levels)",
    )
    parser.add_argument(
        "--outdir",
        type=str,
        help="Output directory for artifacts (results.csv, summary.json, report.md)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format written to stdout",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the price simulator CLI."""
    args = build_parser().parse_args(argv)
    settings = SimulatorSettings()
    configure_logging(args.log_level or settings.log_level, settings.log_json)

    config_path = args.config or settings.config_path
    outdir = args.outdir or settings.outdir

    try:
        if config_path:
            logger.info("loading_config", path=config_path)
            config = load_config(config_path)
        else:
            config = default_config()

        provider: ActivityLevelProvider = ConfigActivityLevelProvider(config)
        names = args.activity or provider.list_activity_levels()
        levels = [provider.get_activity_level(name) for name in names]
        model_cls = get_model(config.model)
    except (FileNotFoundError, yaml.YAMLError, ValidationError, ActivityLevelError, KeyError, ValueError) as e:
        logger.error("invalid_configuration", error=str(e))
        return EXIT_USAGE

    # Apply CLI overrides or use defaults
    defaults = config.defaults
    starting_price = (
        args.starting_price if args.starting_price is not None else defaults.starting_price
    )
    trades = args.trades if args.trades is not None else defaults.trades
    n_simulations = args.N if args.N is not None else defaults.n_simulations
    seed = args.seed if args.seed is not None else defaults.seed
    growth_rates = args.growth_rates if args.growth_rates is not None else config.growth_rates

    logger.info(
        "simulation_parameters",
        starting_price=starting_price,
        trades=trades,
        n_simulations=n_simulations,
        seed=seed,
        activity_levels=[level.name for level in levels],
    )

    try:
        result = run_activity_levels(
            starting_price=starting_price,
            trades=trades,
            activity_levels=levels,
            n_simulations=n_simulations,
            sample_trades=defaults.sample_trades,
            seed=seed,
            model_cls=model_cls,
        )
    except ValueError as e:
        logger.error("invalid_arguments", error=str(e))
        return EXIT_USAGE

    growth_rows = project_fixed_growth(starting_price, growth_rates, trades)

    if args.format == "json":
        payload = build_payload(result, growth_rows)
        sys.stdout.write(json.dumps(payload, indent=2, allow_nan=False) + "\n")
    else:
        sys.stdout.write(render_report(result, growth_rows))

    if outdir:
        write_artifacts(result, outdir, growth_rows)

    logger.info("simulation_complete", activity_levels=len(levels))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
