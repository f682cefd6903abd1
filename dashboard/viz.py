"""Visualization utilities for the transactions dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .insights import AmountSeries

BAR_FILL = "rgba(75, 192, 192, 0.6)"
BAR_LINE = "rgba(75, 192, 192, 1)"


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_payment_method_pie(categories: Iterable[Mapping[str, object]]) -> go.Figure:
    """Pie of transaction counts per payment method."""

    data = list(categories)
    if not data:
        return _empty_figure("Tidak ada transaksi untuk ditampilkan.")

    df = pd.DataFrame(data)
    fig = px.pie(
        df,
        names="name",
        values="count",
        color="name",
        color_discrete_map={str(row["name"]): str(row["color"]) for row in data},
        title="Distribusi Transaksi",
    )
    fig.update_traces(textinfo="label+value", sort=False)
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0), height=400)
    return fig


def plot_amount_bars(series: AmountSeries) -> go.Figure:
    """Bar chart of payment amounts labelled by product name."""

    if not series["values"]:
        return _empty_figure("Tidak ada transaksi untuk ditampilkan.")

    fig = go.Figure()
    fig.add_bar(
        name="Transaction Amount",
        # Positional x keeps repeated product names as separate bars.
        x=list(range(len(series["values"]))),
        y=series["values"],
        marker=dict(color=BAR_FILL, line=dict(color=BAR_LINE, width=1)),
        hovertext=series["labels"],
    )
    fig.update_xaxes(
        tickmode="array",
        tickvals=list(range(len(series["labels"]))),
        ticktext=series["labels"],
        tickangle=-30,
    )
    fig.update_layout(
        title="Transaction Overview",
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        margin=dict(l=0, r=0, t=45, b=80),
    )
    return fig
