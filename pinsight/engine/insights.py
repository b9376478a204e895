"""Rule-based business-siting insights for a planning area.

Thresholds:
  Income:   >= 14,000 premium, >= 10,000 mid-to-upper, else value-conscious
  Dwelling: HDB >= 75% estate, landed >= 30% car-oriented, else mixed
  Age:      seniors >= 20% ageing, else under-25 >= 30% young
  Density:  >= 15,000/km² captive base, < 1,000/km² destination-driven
"""

from pinsight.models.area import AgeMix, DemographicRecord, DwellingMix
from pinsight.models.resolution import Insight

# (minimum density, label, colour) checked top-down
DENSITY_TIERS: list[tuple[int, str, str]] = [
    (15_000, "Very High", "#d53e4f"),
    (8_000, "High", "#fc8d59"),
    (3_000, "Moderate", "#fee08b"),
    (500, "Low", "#99d594"),
    (0, "Very Low", "#3288bd"),
]


def _density_tier(density: int) -> tuple[int, str, str]:
    for tier in DENSITY_TIERS:
        if density >= tier[0]:
            return tier
    return DENSITY_TIERS[-1]


def density_label(density: int) -> str:
    return _density_tier(density)[1]


def density_colour(density: int) -> str:
    """Choropleth hint colour for a density value."""
    return _density_tier(density)[2]


def dominant_dwelling(dwellings: DwellingMix) -> str:
    """Dwelling type with the largest share; earlier type wins a tie."""
    shares = dwellings.as_dict()
    return max(shares, key=lambda k: shares[k])


def largest_age_band(age_groups: AgeMix) -> str:
    shares = age_groups.as_dict()
    return max(shares, key=lambda k: shares[k])


def _income_insight(income: int) -> Insight:
    if income >= 14_000:
        return Insight("🎯", "High-income neighbourhood — premium or lifestyle brands may thrive here.")
    if income >= 10_000:
        return Insight("🎯", "Mid-to-upper income area — broad product range likely to perform well.")
    return Insight("🎯", "Value-conscious area — competitive pricing and everyday essentials resonate.")


def _dwelling_insight(dwellings: DwellingMix) -> Insight:
    if dwellings.hdb >= 75:
        return Insight(
            "🏗️",
            f"Predominantly HDB estate ({dwellings.hdb}%) — high foot traffic near void decks and wet markets.",
        )
    if dwellings.landed >= 30:
        return Insight(
            "🏡",
            f"High landed-property share ({dwellings.landed}%) — car ownership likely, "
            "large-format retail may be viable.",
        )
    return Insight("🏙️", "Mixed condo/HDB zone — diverse consumer base, food & beverage tends to perform strongly.")


def _age_insight(age_groups: AgeMix) -> Insight | None:
    if age_groups.senior >= 20:
        return Insight(
            "👴",
            f"Ageing population ({age_groups.senior}% seniors) — healthcare, convenience, "
            "and accessible services in demand.",
        )
    if age_groups.young >= 30:
        return Insight(
            "👶",
            f"Young demographic ({age_groups.young}% under-25) — education, childcare, "
            "and family-oriented concepts may do well.",
        )
    return None


def _density_insight(density: int) -> Insight | None:
    if density >= 15_000:
        return Insight("📈", "Very high population density — strong captive customer base for neighbourhood businesses.")
    if density < 1_000:
        return Insight("🚗", "Low-density area — destination-driven shoppers; parking and accessibility are key.")
    return None


def generate_insights(record: DemographicRecord) -> list[Insight]:
    """Income and dwelling insights always; age and density only at the extremes."""
    insights = [
        _income_insight(record.median_household_income),
        _dwelling_insight(record.dwellings),
    ]
    for optional in (_age_insight(record.age_groups), _density_insight(record.density)):
        if optional is not None:
            insights.append(optional)
    return insights
