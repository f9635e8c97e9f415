"""Food-safety temperature rules (°C).

Every classifier is a pure function of the reading so the same value
always gets the same verdict, including exactly at the cutoffs:

    cooking / hot-holding   safe when  t >= 65
    reheating               safe when  t >= 75
    transport               unsafe when t > 8, borderline when 5 < t <= 8
    delivery (chilled)      danger zone when 5 < t < 60
    delivery (frozen)       warn when -18 < t < 0
    cooling                 60 → 21 within 2h, then 21 → 5 within a further 4h
    chiller / freezer       0..5 and -25..-15 inclusive
"""

from dataclasses import dataclass, field

COOKING_MIN_TEMP = 65.0
REHEATING_MIN_TEMP = 75.0

TRANSPORT_BORDERLINE_ABOVE = 5.0
TRANSPORT_UNSAFE_ABOVE = 8.0

DANGER_ZONE_LOW = 5.0
DANGER_ZONE_HIGH = 60.0
FROZEN_MAX_TEMP = -18.0

COOLING_START_TEMP = 60.0
COOLING_STAGE_ONE_TARGET = 21.0
COOLING_STAGE_ONE_MINUTES = 120
COOLING_STAGE_TWO_TARGET = 5.0
COOLING_STAGE_TWO_MINUTES = 240

CHILLER_RANGE = (0.0, 5.0)
FREEZER_RANGE = (-25.0, -15.0)

LEVEL_SAFE = "safe"
LEVEL_BORDERLINE = "borderline"
LEVEL_UNSAFE = "unsafe"

TRANSPORT_MESSAGES = {
    LEVEL_UNSAFE: "Temperature is unsafe (>8°C). According to 2/4 hour rule, food should be discarded.",
    LEVEL_BORDERLINE: "Temperature is borderline (5-8°C). Monitor closely.",
}


def is_cooking_safe(temperature: float) -> bool:
    return temperature >= COOKING_MIN_TEMP


def is_reheating_safe(temperature: float) -> bool:
    return temperature >= REHEATING_MIN_TEMP


def classify_transport(temperature: float) -> str:
    if temperature > TRANSPORT_UNSAFE_ABOVE:
        return LEVEL_UNSAFE
    if temperature > TRANSPORT_BORDERLINE_ABOVE:
        return LEVEL_BORDERLINE
    return LEVEL_SAFE


def in_danger_zone(temperature: float) -> bool:
    return DANGER_ZONE_LOW < temperature < DANGER_ZONE_HIGH


def delivery_warning(temperature: float | None) -> str | None:
    """Warning text for a received delivery, or None when it is acceptable."""
    if temperature is None:
        return None
    if temperature < 0:
        if temperature > FROZEN_MAX_TEMP:
            return "Frozen food should be stored at -18°C or below"
        return None
    if in_danger_zone(temperature):
        return (
            "Temperature is in the danger zone (5°C - 60°C). "
            "Cold food should be stored at 5°C or below."
        )
    return None


def check_storage(temperature: float, unit: str = "chiller") -> bool:
    """Fridge/freezer check: True when the reading is inside the unit's range."""
    low, high = FREEZER_RANGE if unit == "freezer" else CHILLER_RANGE
    return low <= temperature <= high


def storage_faults(chillers: list[float], freezer: float) -> list[str]:
    """Names of the units reading outside their range, chillers numbered from 1."""
    faults = [
        f"Chiller #{number}"
        for number, temperature in enumerate(chillers, start=1)
        if not check_storage(temperature, "chiller")
    ]
    if not check_storage(freezer, "freezer"):
        faults.append("Freezer")
    return faults


def minutes_between(start: str, end: str) -> int:
    """Minutes from ``start`` to ``end`` (``HH:MM``), wrapping past midnight."""
    sh, sm = (int(p) for p in start.split(":"))
    eh, em = (int(p) for p in end.split(":"))
    diff = (eh * 60 + em) - (sh * 60 + sm)
    if diff < 0:
        diff += 24 * 60
    return diff


@dataclass
class CoolingResult:
    # None while a reading is still outstanding
    passed: bool | None
    stage_one_ok: bool | None = None
    stage_two_ok: bool | None = None
    problems: list[str] = field(default_factory=list)


def evaluate_cooling(
    start_time: str,
    second_time: str | None,
    second_temp: float | None,
    third_time: str | None,
    third_temp: float | None,
    start_temp: float | None = None,
) -> CoolingResult:
    """Judge a cooling curve against the two-stage rule.

    Stage one runs from the start reading to the second check, stage two
    from the second check to the third.
    """
    result = CoolingResult(passed=None)
    if start_temp is not None and start_temp < COOLING_STAGE_ONE_TARGET:
        result.problems.append("Start temperature is already below 21°C")

    if second_time is None or second_temp is None:
        return result

    stage_one_minutes = minutes_between(start_time, second_time)
    result.stage_one_ok = (
        second_temp <= COOLING_STAGE_ONE_TARGET
        and stage_one_minutes <= COOLING_STAGE_ONE_MINUTES
    )
    if second_temp > COOLING_STAGE_ONE_TARGET:
        result.problems.append(f"Second check {second_temp}°C is above 21°C")
    if stage_one_minutes > COOLING_STAGE_ONE_MINUTES:
        result.problems.append(
            f"Reaching 21°C took {stage_one_minutes} minutes (limit 120)"
        )

    if third_time is None or third_temp is None:
        if not result.stage_one_ok:
            result.passed = False
        return result

    stage_two_minutes = minutes_between(second_time, third_time)
    result.stage_two_ok = (
        third_temp <= COOLING_STAGE_TWO_TARGET
        and stage_two_minutes <= COOLING_STAGE_TWO_MINUTES
    )
    if third_temp > COOLING_STAGE_TWO_TARGET:
        result.problems.append(f"Third check {third_temp}°C is above 5°C")
    if stage_two_minutes > COOLING_STAGE_TWO_MINUTES:
        result.problems.append(
            f"Reaching 5°C took {stage_two_minutes} more minutes (limit 240)"
        )

    result.passed = bool(result.stage_one_ok and result.stage_two_ok)
    return result
