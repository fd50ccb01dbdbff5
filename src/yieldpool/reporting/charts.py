"""Chart generation using Plotly."""

import pandas as pd
import plotly.graph_objects as go

from ..engine.fixed_point import SCALE, SECONDS_PER_YEAR

THEME = {
    "text": "#e8eaed",
    "text_secondary": "#9aa0a6",
    "grid": "rgba(30, 33, 36, 0.8)",
    "cyan": "#00d4ff",
    "cyan_fill": "rgba(0, 212, 255, 0.12)",
    "amber": "#ffab00",
    "red": "#ff5252",
}


def apply_dark_layout(fig: go.Figure, title: str, x_title: str, y_title: str, showlegend: bool = True) -> None:
    """Apply dark theme layout."""
    fig.update_layout(
        title={"text": title, "x": 0, "xanchor": "left", "font": {"size": 11, "color": THEME["text_secondary"]}},
        xaxis_title=x_title,
        yaxis_title=y_title,
        hovermode="x unified",
        template="plotly_dark",
        height=340,
        margin=dict(l=50, r=20, t=40, b=40),
        showlegend=showlegend,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        plot_bgcolor="rgba(8, 9, 10, 1)",
        paper_bgcolor="rgba(8, 9, 10, 1)",
        font={"color": THEME["text"], "size": 11},
        xaxis=dict(gridcolor=THEME["grid"], zerolinecolor=THEME["grid"]),
        yaxis=dict(gridcolor=THEME["grid"], zerolinecolor=THEME["grid"]),
    )


def create_liability_chart(projection: pd.DataFrame) -> go.Figure:
    """Liabilities against pool collateral over a projection."""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=projection["days"],
        y=projection["total_liabilities"].astype(float),
        name='Liabilities',
        mode='lines',
        line=dict(color=THEME["cyan"], width=2),
        fill='tozeroy',
        fillcolor=THEME["cyan_fill"]
    ))

    fig.add_trace(go.Scatter(
        x=projection["days"],
        y=projection["available_balance"].astype(float),
        name='Collateral',
        mode='lines',
        line=dict(color=THEME["amber"], width=2, dash='dot')
    ))
    apply_dark_layout(fig, "Liabilities vs Collateral", "Days from now", "Units")

    return fig


def create_rate_chart(projection: pd.DataFrame) -> go.Figure:
    """Annualized active rate (%) as a step function."""
    annual_pct = projection["rate_per_second"].astype(float) * SECONDS_PER_YEAR / SCALE * 100

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=projection["days"],
        y=annual_pct,
        name='Rate',
        mode='lines',
        line=dict(color=THEME["red"], width=2, shape='hv')
    ))
    apply_dark_layout(fig, "Active Yield Rate", "Days from now", "APR (%)", showlegend=False)

    return fig
