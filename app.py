"""Streamlit GUI for the Black-Scholes option calculator.

Run with: streamlit run app.py
"""

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from bsm_calculator.analytics.payoff import curve_to_frame
from bsm_calculator.engine import CalculationMode, CalculationRequest, recompute
from bsm_calculator.models.market_inputs import MarketInputs, OptionSide, PositionDirection
from bsm_calculator.models.results import position_greeks
from bsm_calculator.output.console import moneyness

# Page config
st.set_page_config(
    page_title="Black-Scholes Calculator",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("📈 Black-Scholes Option Calculator")
st.markdown("*European option pricing, Greeks and implied volatility*")

defaults = MarketInputs.default()

# Sidebar - Inputs
st.sidebar.header("⚙️ Inputs")

mode_label = st.sidebar.radio("Mode:", ["Price", "Implied Vol"], horizontal=True)
mode = CalculationMode.PRICE if mode_label == "Price" else CalculationMode.IMPLIED_VOL

side = OptionSide(st.sidebar.radio("Option:", ["call", "put"], horizontal=True))
direction = PositionDirection(st.sidebar.radio("Position:", ["long", "short"], horizontal=True))

st.sidebar.subheader("📊 Market")
spot = st.sidebar.number_input("Spot Price", min_value=0.01, value=defaults.spot, step=1.0)
strike = st.sidebar.number_input("Strike Price", min_value=0.01, value=defaults.strike, step=1.0)
valuation_date = st.sidebar.date_input("Valuation Date", value=defaults.valuation_date)
exercise_date = st.sidebar.date_input("Exercise Date", value=defaults.exercise_date)
rate = st.sidebar.number_input("Risk-Free Rate (%)", value=defaults.risk_free_rate, step=0.25)
dividend = st.sidebar.number_input("Dividend Yield (%)", value=defaults.dividend_yield, step=0.25)

market_price = None
if mode is CalculationMode.PRICE:
    volatility = st.sidebar.number_input(
        "Volatility (%)", min_value=0.1, value=defaults.volatility, step=1.0
    )
else:
    volatility = defaults.volatility
    market_price = st.sidebar.number_input(
        "Market Price", min_value=0.0, value=0.0, step=0.05,
        help="Observed price of the selected option"
    )

inputs = MarketInputs(
    spot=float(spot),
    strike=float(strike),
    valuation_date=valuation_date if isinstance(valuation_date, date) else date.today(),
    exercise_date=exercise_date if isinstance(exercise_date, date) else defaults.exercise_date,
    volatility=float(volatility),
    risk_free_rate=float(rate),
    dividend_yield=float(dividend),
)

if mode is CalculationMode.IMPLIED_VOL and not st.sidebar.button("🚀 Solve IV", type="primary"):
    st.info("👈 Enter the market price of the option and press Solve IV")
    st.stop()

outcome = recompute(CalculationRequest(
    inputs=inputs,
    mode=mode,
    side=side,
    direction=direction,
    market_price=market_price,
))

if not outcome.ok:
    st.error(f"❌ {outcome.message}")
    st.stop()

snapshot = outcome.value
selected = snapshot.pricing.for_side(side)
position = position_greeks(selected, direction)

if mode is CalculationMode.IMPLIED_VOL:
    st.success(
        f"✅ Implied Vol: {snapshot.volatility_percent:.2f}% "
        f"({snapshot.iterations} iterations)"
    )

# Results
st.header(f"📊 {direction.value.capitalize()} {side.value.capitalize()} "
          f"({moneyness(inputs.spot, inputs.strike, side)})")

col1, col2, col3, col4, col5 = st.columns(5)
col1.metric("Price", f"${selected.price:.4f}")
col2.metric("Delta", f"{position.delta:.4f}")
col3.metric("Gamma", f"{position.gamma:.6f}")
col4.metric("Vega", f"{position.vega:.4f}")
col5.metric("Theta", f"{position.theta:.4f}")
st.caption(
    f"Time to expiry: {snapshot.pricing.time_to_expiry:.4f} years "
    f"({snapshot.inputs.days_to_expiry} days)"
)

frame = curve_to_frame(snapshot.curve)
prefix = side.value


def plot_pnl(df: pd.DataFrame) -> go.Figure:
    """P&L at expiry, current mark-to-market and intrinsic value across spot."""
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df['spot'], y=df[f'{prefix}_payoff'],
        mode='lines', name='Payoff at Expiry',
        line=dict(color='blue', width=3),
    ))
    fig.add_trace(go.Scatter(
        x=df['spot'], y=df[f'{prefix}_current'],
        mode='lines', name='Current P&L',
        line=dict(color='green', width=2),
    ))
    fig.add_trace(go.Scatter(
        x=df['spot'], y=df[f'{prefix}_intrinsic'],
        mode='lines', name='Intrinsic Value',
        line=dict(color='orange', width=2, dash='dot'),
    ))

    fig.add_hline(y=0, line_dash="dash", line_color="gray", opacity=0.5)
    fig.add_vline(
        x=inputs.spot,
        line_dash="solid",
        line_color="green",
        annotation_text=f"Spot: ${inputs.spot:.2f}",
        annotation_position="top"
    )
    fig.add_vline(
        x=inputs.strike,
        line_dash="dash",
        line_color="purple",
        opacity=0.3,
        annotation_text="K",
        annotation_position="top"
    )

    fig.update_layout(
        title=f"{direction.value.capitalize()} {side.value.capitalize()} P&L",
        xaxis_title="Underlying Price",
        yaxis_title="Profit/Loss ($)",
        hovermode='x unified',
        height=500,
        showlegend=True,
    )
    return fig


def plot_greek(df: pd.DataFrame, column: str, title: str, color: str) -> go.Figure:
    fig = go.Figure(go.Scatter(
        x=df['spot'], y=df[column], mode='lines', line=dict(color=color, width=2)
    ))
    fig.update_layout(title=title, xaxis_title="Underlying Price", height=300)
    return fig


st.header("📈 Profit/Loss Diagram")
st.plotly_chart(plot_pnl(frame), use_container_width=True)

st.subheader("Greeks by Spot")
g1, g2, g3 = st.columns(3)
with g1:
    st.plotly_chart(plot_greek(frame, f'{prefix}_delta', "Delta", "blue"), use_container_width=True)
with g2:
    st.plotly_chart(plot_greek(frame, 'gamma', "Gamma", "red"), use_container_width=True)
with g3:
    st.plotly_chart(plot_greek(frame, 'vega', "Vega", "purple"), use_container_width=True)

with st.expander("📋 Curve Data"):
    st.dataframe(frame.round(4), use_container_width=True)
