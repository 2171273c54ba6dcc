"""Weather-driven task suggestions for the next three days.

Rules are evaluated independently, in order; each contributes at most one
suggestion, keyed by its rule id (first occurrence wins).
"""
from typing import Dict, List, Sequence

from agro.domain.Task import TaskSuggestion
from agro.domain.Weather import WeatherCondition, WeatherDay
from agro.utilities.constants import (
    HEAVY_RAIN_CHANCE,
    PLANTING_MAX_RAIN,
    PLANTING_MIN_DAYS,
    PLANTING_MIN_TEMP,
    SUGGESTION_HORIZON_DAYS,
    SUNNY_DRY_CHANCE,
    SUNNY_MIN_DAYS,
    WINDY_KMH,
)

__all__ = ["generate_task_suggestions", "RULE_HEAVY_RAIN", "RULE_SUNNY_SPELL", "RULE_STRONG_WIND", "RULE_PLANTING"]

RULE_HEAVY_RAIN = "heavy_rain"
RULE_SUNNY_SPELL = "sunny_spell"
RULE_STRONG_WIND = "strong_wind"
RULE_PLANTING = "planting_window"


def _num(value) -> str:
    return f"{value:g}"


def _heavy_rain(days: Sequence[WeatherDay]):
    rainy = [d for d in days if d.rain_chance > HEAVY_RAIN_CHANCE]
    if not rainy:
        return None
    first = rainy[0]
    return TaskSuggestion(
        RULE_HEAVY_RAIN,
        "Pioggia in arrivo",
        f"Prevista pioggia con probabilità superiore al {_num(first.rain_chance)}% per {first.day.lower()}. "
        "Considera di posticipare l'irrigazione e i trattamenti fogliari.",
        "warning",
    )


def _sunny_spell(days: Sequence[WeatherDay]):
    sunny = [d for d in days if d.condition == WeatherCondition.SUNNY and d.rain_chance < SUNNY_DRY_CHANCE]
    if len(sunny) < SUNNY_MIN_DAYS:
        return None
    return TaskSuggestion(
        RULE_SUNNY_SPELL,
        "Periodo favorevole",
        f"Si prevedono {len(sunny)} giorni di sole. È un ottimo momento per la raccolta, "
        "la semina o i lavori di preparazione del terreno.",
    )


def _strong_wind(days: Sequence[WeatherDay]):
    windy = next((d for d in days if d.condition == WeatherCondition.WINDY or d.wind > WINDY_KMH), None)
    if windy is None:
        return None
    return TaskSuggestion(
        RULE_STRONG_WIND,
        "Attenzione al vento forte",
        f"Previsto vento superiore a {_num(windy.wind)} km/h per {windy.day.lower()}. "
        "Sconsigliata la nebulizzazione di trattamenti per evitarne la dispersione.",
        "warning",
    )


def _planting_window(days: Sequence[WeatherDay]):
    if any(d.rain_chance > HEAVY_RAIN_CHANCE for d in days):
        return None
    mild = [d for d in days if d.temp > PLANTING_MIN_TEMP and d.rain_chance < PLANTING_MAX_RAIN]
    if len(mild) < PLANTING_MIN_DAYS:
        return None
    return TaskSuggestion(
        RULE_PLANTING,
        "Condizioni ideali per la semina",
        "Le temperature miti e l'assenza di piogge intense creano un ambiente perfetto "
        "per seminare o trapiantare nuove colture.",
    )


RULES = (_heavy_rain, _sunny_spell, _strong_wind, _planting_window)


def generate_task_suggestions(weather_days: Sequence[WeatherDay]) -> List[TaskSuggestion]:
    """Suggestions for the first three forecast days; empty input gives an empty list."""
    horizon = list(weather_days or [])[:SUGGESTION_HORIZON_DAYS]
    if not horizon:
        return []
    by_rule: Dict[str, TaskSuggestion] = {}
    seen_titles = set()
    for rule in RULES:
        suggestion = rule(horizon)
        if suggestion is None or suggestion.rule in by_rule or suggestion.title in seen_titles:
            continue
        by_rule[suggestion.rule] = suggestion
        seen_titles.add(suggestion.title)
    return list(by_rule.values())
