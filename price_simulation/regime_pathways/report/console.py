"""Human-readable text report."""

from regime_pathways.engine.simulator import SimulationResult, SimulationRun

USDC_DECIMALS = 6
RULE_WIDTH = 60
SECTION_WIDTH = 40


def format_usdc(amount: float) -> str:
    """Format an amount in USDC smallest units as dollars, e.g. 2_000_000 -> "$2.00"."""
    return f"${amount / 10**USDC_DECIMALS:,.2f}"


def format_change(change: float) -> str:
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.1f}%"


def render_run(run: SimulationRun) -> list[str]:
    """Render the section for one activity level."""
    name = run.label or run.activity_level
    lines = [
        f"{name} ACTIVITY LEVEL",
        "-" * SECTION_WIDTH,
        f"Expected Change Per Trade: {run.expected_change_per_trade:.2f}%",
        f"Expected Final Price (Mathematical): {format_usdc(run.expected_final_price)}",
        f"Simulated Average Final Price: {format_usdc(run.final_price)}",
        f"Total Growth: {run.summary['total_growth']:.1f}%",
        f"Average Growth Per Trade: {run.summary['avg_growth_per_trade']:.2f}%",
        (
            f"Final Price Percentiles: p10 {format_usdc(run.summary['p10'])}, "
            f"p50 {format_usdc(run.summary['p50'])}, "
            f"p90 {format_usdc(run.summary['p90'])}"
        ),
        f"Probability Of Ending Below Start: {run.summary['prob_down'] * 100:.1f}%",
        "",
        "Regime Usage Breakdown:",
    ]
    for regime, share in run.regime_breakdown.items():
        lines.append(f"  {regime}: {share:.1f}%")

    if run.sample_trajectory:
        lines.append("")
        lines.append(f"Sample Simulation (First {len(run.sample_trajectory)} trades):")
        for step in run.sample_trajectory:
            lines.append(
                f"  Trade {step.trade}: {format_usdc(step.price)} "
                f"({format_change(step.change)}) [{step.regime}]"
            )
    lines.append("")
    return lines


def render_report(
    result: SimulationResult,
    growth_rows: list[dict[str, float]] | None = None,
) -> str:
    """Render the full multi-level report.

    Args:
        result: Output of run_activity_levels
        growth_rows: Output of project_fixed_growth, for the comparison section

    Returns:
        Report text
    """
    first = next(iter(result.runs.values()))
    lines = [
        f"MARKET REGIME ANALYSIS - {first.trades} TRADES SIMULATION",
        "=" * RULE_WIDTH,
        f"Starting Price: {format_usdc(first.starting_price)}",
        f"Number of Trades: {first.trades}",
        f"Simulations Per Level: {first.n_simulations}",
        "",
    ]
    for run in result.runs.values():
        lines.extend(render_run(run))

    if growth_rows:
        rates = [row["rate"] for row in growth_rows]
        lines.append(f"SIMPLE {min(rates):g}-{max(rates):g}% GROWTH COMPARISON")
        lines.append("-" * SECTION_WIDTH)
        for row in growth_rows:
            lines.append(
                f"{row['rate']:g}% per trade: {format_usdc(row['final_price'])} "
                f"({row['total_growth']:.1f}% total growth)"
            )
        lines.append("")

    lines.append("RISK ANALYSIS")
    lines.append("-" * SECTION_WIDTH)
    for run in result.runs.values():
        lines.append(
            f"{run.label or run.activity_level}: "
            f"{run.risk['loss_probability']:g}% chance of loss per trade, "
            f"max loss: {run.risk['max_loss_per_trade']:g}%"
        )

    return "\n".join(lines) + "\n"
