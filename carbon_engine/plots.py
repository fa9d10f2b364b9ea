# MIT License
"""Plotly figure builders for the carbon project dashboard.

Figures are built from the chart series carried by the results objects,
so the pages never recompute anything.  All figures share the
``plotly_white`` template.
"""

from __future__ import annotations

from typing import Sequence

import plotly.graph_objects as go

from .results import Bucket, ConstructionResults, LivestockMetrics, Results

POSITIVE_COLOR = "#2e8b57"
NEGATIVE_COLOR = "#c0392b"


def fig_cashflow(results: Results) -> go.Figure:
    """Annual net cash flow bars with the cumulative cash flow as a line.

    Parameters
    ----------
    results:
        Results of a credit-producing project.

    Returns
    -------
    plotly.graph_objects.Figure
        Bars coloured by sign plus a cumulative trace.
    """
    points = results.chart_series.cash_flow
    years = [p.year for p in points]
    fig = go.Figure()
    fig.add_bar(
        x=years,
        y=[p.cashflow for p in points],
        marker_color=[POSITIVE_COLOR if p.is_positive else NEGATIVE_COLOR for p in points],
        name="Net cash flow",
    )
    fig.add_scatter(x=years, y=[p.cumulative for p in points], mode="lines+markers", name="Cumulative")
    fig.update_layout(
        title="Annual Cash Flow",
        xaxis_title="Year",
        yaxis_title="Cash flow",
        template="plotly_white",
    )
    return fig


def fig_npv(results: Results) -> go.Figure:
    points = results.chart_series.npv
    fig = go.Figure()
    fig.add_scatter(
        x=[p.year for p in points],
        y=[p.cumulative_npv for p in points],
        mode="lines",
        fill="tozeroy",
        name="Cumulative NPV",
    )
    fig.update_layout(
        title=f"Cumulative NPV at {results.discount_rate:g}%",
        xaxis_title="Year",
        yaxis_title="NPV",
        template="plotly_white",
    )
    return fig


def fig_sequestration(results: Results) -> go.Figure:
    df = results.to_frame()
    fig = go.Figure()
    fig.add_bar(x=df["year"], y=df["sequestration"], name="tCO2e")
    fig.update_layout(title="Annual Carbon Impact", xaxis_title="Year", yaxis_title="tCO2e", template="plotly_white")
    return fig


def fig_donut(buckets: Sequence[Bucket], title: str) -> go.Figure:
    fig = go.Figure(go.Pie(labels=[b.name for b in buckets], values=[b.value for b in buckets], hole=0.55))
    fig.update_layout(template="plotly_white", title=title)
    return fig


def fig_cost_breakdown(results: Results) -> go.Figure:
    return fig_donut(results.chart_series.cost_breakdown, "Cost Breakdown")


def fig_livestock_intensity(metrics: LivestockMetrics) -> go.Figure:
    """Per-head emissions before and after the project measures."""
    intensity = metrics.emissions_intensity
    fig = go.Figure()
    fig.add_bar(x=["Baseline", "With project"], y=[intensity.baseline, intensity.reduced], name="kg CO2e/head/yr")
    fig.update_layout(
        template="plotly_white",
        title=f"Emissions Intensity ({intensity.percent_reduction:.1f}% lower)",
        yaxis_title="kg CO2e per head per year",
    )
    return fig


def fig_construction_breakdown(results: ConstructionResults) -> go.Figure:
    return fig_donut(results.emissions_breakdown, "Lifetime Emissions")


def fig_construction_emissions(results: ConstructionResults) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=["Embodied"], y=[results.baseline_embodied], name="Baseline")
    fig.add_bar(x=["Embodied"], y=[results.reduced_embodied], name="Green")
    fig.add_bar(x=["Operational (yr)"], y=[results.base_operational], name="Baseline", showlegend=False)
    fig.add_bar(x=["Operational (yr)"], y=[results.final_operational], name="Green", showlegend=False)
    fig.update_layout(template="plotly_white", barmode="group", title="Baseline vs Green Building", yaxis_title="tCO2e")
    return fig
