"""Derived metric recomputation from accumulated base counters.

Every function here is meant to run on fully summed counters of a group.
Rates are never summed or averaged across records; callers sum the base
counters first and derive once.
"""

from __future__ import annotations

import polars as pl


def safe_ratio(num: float, den: float, scale: float = 1.0) -> float:
    if den <= 0:
        return 0.0
    return num / den * scale


def ctr(impressions: float, clicks: float) -> float:
    return safe_ratio(clicks, impressions, 100.0)


def conversion_rate(clicks: float, conversions: float) -> float:
    return safe_ratio(conversions, clicks, 100.0)


def cpc(spend: float, clicks: float) -> float:
    return safe_ratio(spend, clicks)


def cpa(spend: float, conversions: float) -> float:
    return safe_ratio(spend, conversions)


def roas(spend: float, revenue: float) -> float:
    return safe_ratio(revenue, spend)


def traffic_share(dim_impressions: float, total_impressions: float) -> float:
    """Share of impressions in percent. Unguarded: a zero total yields NaN."""
    if total_impressions == 0:
        return float("nan")
    return dim_impressions / total_impressions * 100


def safe_ratio_expr(num: pl.Expr, den: pl.Expr, scale: float = 1.0) -> pl.Expr:
    return pl.when(den > 0).then(num.cast(pl.Float64) / den * scale).otherwise(pl.lit(0.0))


def ctr_expr(impressions: str = "impressions", clicks: str = "clicks") -> pl.Expr:
    return safe_ratio_expr(pl.col(clicks), pl.col(impressions), 100.0).alias("ctr")


def conversion_rate_expr(clicks: str = "clicks", conversions: str = "conversions") -> pl.Expr:
    return safe_ratio_expr(pl.col(conversions), pl.col(clicks), 100.0).alias("conversion_rate")


def cpc_expr(spend: str = "spend", clicks: str = "clicks") -> pl.Expr:
    return safe_ratio_expr(pl.col(spend), pl.col(clicks)).alias("cpc")


def cpa_expr(spend: str = "spend", conversions: str = "conversions") -> pl.Expr:
    return safe_ratio_expr(pl.col(spend), pl.col(conversions)).alias("cpa")


def roas_expr(spend: str = "spend", revenue: str = "revenue") -> pl.Expr:
    return safe_ratio_expr(pl.col(revenue), pl.col(spend)).alias("roas")


def traffic_share_expr(impressions: str = "impressions") -> pl.Expr:
    # 0/0 on floats is NaN in Polars, matching traffic_share().
    col = pl.col(impressions).cast(pl.Float64)
    return (col / col.sum() * 100).alias("percentage_of_traffic")
