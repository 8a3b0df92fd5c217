"""LTR retention cost planning.

Estimates what keeping weekly, monthly and yearly long-term-retention
backups costs for a growing database, now and along a timeline.
"""

from __future__ import annotations

import math

from az_backup_pricing.config import BEST_PRICE_CURRENCY
from az_backup_pricing.models import (
    CostBreakdown,
    CostParameters,
    RetentionPlan,
    RetentionPlanRequest,
    RetentionSettings,
    Timeline,
    TimelineCosts,
    TimelineInterval,
    TimelineSeries,
)
from az_backup_pricing.pricing import PricingResolver

WEEKS_PER_MONTH = 4.33

# Months between two timeline points.
_INTERVAL_STEP: dict[str, float] = {
    "weekly": 0.25,
    "monthly": 1.0,
    "quarterly": 3.0,
    "yearly": 12.0,
}


def calculate_current_cost_breakdown(params: CostParameters) -> CostBreakdown:
    """Monthly and yearly storage cost of the retained backups today.

    Each backup tier is priced at the average database size over its
    retention window, assuming linear growth.
    """
    retention = params.retention
    monthly_growth = params.growthRate / 100 / 12
    growth_per_month = params.dbSize * monthly_growth

    avg_weekly = params.dbSize + growth_per_month * (retention.weekly / WEEKS_PER_MONTH) / 2
    avg_monthly = params.dbSize + growth_per_month * retention.monthly / 2
    avg_yearly = params.dbSize + growth_per_month * (retention.yearly * 12) / 2

    weekly = avg_weekly * retention.weekly * params.storagePrice
    monthly = avg_monthly * retention.monthly * params.storagePrice
    yearly = avg_yearly * retention.yearly * params.storagePrice
    total_monthly = weekly + monthly + yearly
    return CostBreakdown(
        weeklyBackupCost=weekly,
        monthlyBackupCost=monthly,
        yearlyBackupCost=yearly,
        totalMonthlyCost=total_monthly,
        totalYearlyCost=total_monthly * 12,
    )


def calculate_cost_at_month(
    current_month: float,
    current_db_size: float,
    retention: RetentionSettings,
    storage_price: float,
    monthly_growth_rate: float,
) -> TimelineCosts:
    """Cost of the backups that exist at *current_month*.

    Older backups are smaller: their size is *current_db_size* discounted by
    the growth since they were taken.
    """

    def _size(months_ago: float) -> float:
        return current_db_size * (1 + monthly_growth_rate) ** -months_ago

    weekly = 0.0
    if retention.weekly > 0:
        weeks = min(current_month * WEEKS_PER_MONTH, retention.weekly)
        for week in range(math.ceil(weeks)):
            weekly += _size(math.floor(week / WEEKS_PER_MONTH)) * storage_price

    monthly = 0.0
    for months_ago in range(retention.monthly):
        if current_month - months_ago >= 0:
            monthly += _size(months_ago) * storage_price

    yearly = 0.0
    for years_ago in range(retention.yearly):
        if current_month - years_ago * 12 >= 0:
            yearly += _size(years_ago * 12) * storage_price

    return TimelineCosts(
        weekly=weekly, monthly=monthly, yearly=yearly, total=weekly + monthly + yearly
    )


def _label(month: float, interval: TimelineInterval) -> str:
    if interval == "weekly":
        return f"Week {math.floor(month * WEEKS_PER_MONTH)}"
    if interval == "quarterly":
        return f"Q{math.floor(month / 3)}"
    if interval == "yearly":
        return f"Year {math.floor(month / 12)}"
    return f"Month {month:g}"


def generate_timeline(
    initial_db_size: float,
    annual_growth_rate: float,
    retention: RetentionSettings,
    storage_price: float,
    timeline_years: float,
    interval: TimelineInterval = "monthly",
) -> Timeline:
    """Cost series over *timeline_years*, one point per *interval*.

    Only the tiers with a non-zero retention get a series; the ``Total Cost``
    series is present whenever any tier is.
    """
    months = timeline_years * 12
    monthly_growth = annual_growth_rate / 100 / 12
    step = _INTERVAL_STEP[interval]

    labels: list[str] = []
    points: list[TimelineCosts] = []
    month = 0.0
    while month <= months:
        size = initial_db_size * (1 + monthly_growth) ** month
        points.append(
            calculate_cost_at_month(month, size, retention, storage_price, monthly_growth)
        )
        labels.append(_label(month, interval))
        month = round(month + step, 2)

    series = [
        ("Total Cost", "total", retention.has_backups),
        ("Weekly Backups", "weekly", retention.weekly > 0),
        ("Monthly Backups", "monthly", retention.monthly > 0),
        ("Yearly Backups", "yearly", retention.yearly > 0),
    ]
    datasets = [
        TimelineSeries(label=label, data=[getattr(p, field) for p in points])
        for label, field, shown in series
        if shown
    ]
    return Timeline(labels=labels, datasets=datasets)


def plan_retention(request: RetentionPlanRequest, resolver: PricingResolver) -> RetentionPlan:
    """Price *request* with the region's best LTR price unless one is given."""
    price = request.storagePrice
    if price is None:
        price = resolver.get_best_ltr_price(request.region)

    breakdown = calculate_current_cost_breakdown(
        CostParameters(
            dbSize=request.dbSize,
            growthRate=request.growthRate,
            retention=request.retention,
            storagePrice=price,
        )
    )
    timeline = generate_timeline(
        request.dbSize,
        request.growthRate,
        request.retention,
        price,
        request.timelineYears,
        request.xAxisInterval,
    )
    return RetentionPlan(
        region=request.region,
        currency=BEST_PRICE_CURRENCY,
        storagePrice=price,
        breakdown=breakdown,
        timeline=timeline,
    )
