"""Declarative form definitions for the step families.

Each ``FormSpec`` names the answer namespace, the initial form shape and,
where stored and form shapes differ, the transforms between them. Steps
without a dedicated family mount ``reflection_form``.
"""
from typing import Any, Optional

from pathway.program.forms import FormSpec, default_parse, parse_text_field


def _parse_final_word(payload: dict[str, Any]) -> dict[str, Any]:
    # rows written before the rename carry the camel-cased key
    value = payload.get("plan_adjustments") or payload.get("planAdjustments") or ""
    return {"adjustments": parse_text_field(value)}


def _dump_final_word(data: dict[str, Any]) -> dict[str, Any]:
    return {"plan_adjustments": data.get("adjustments", "")}


def _rating(score: Any) -> Optional[int]:
    if isinstance(score, bool):
        return None
    try:
        return int(float(score))
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_monitoring(payload: dict[str, Any]) -> dict[str, Any]:
    data = default_parse(MONITORING_PROGRESS.initial, payload)
    ratings = {}
    for area, score in data["ratings"].items():
        value = _rating(score)
        if value is not None:
            ratings[str(area)] = value
    data["ratings"] = ratings
    return data


def _parse_string_list(field_name: str, initial: dict[str, Any]):
    def parse(payload: dict[str, Any]) -> dict[str, Any]:
        data = default_parse(initial, payload)
        data[field_name] = [str(item) for item in data[field_name] if str(item).strip()]
        return data

    return parse


CLARIFYING_VALUES = FormSpec(
    namespace="clarifying_values",
    initial={
        "selected_value_1": "",
        "selected_value_2": "",
        "reasons_alignment": "",
        "goal_value_alignment": "",
    },
)

VALUES_CONFLICT = FormSpec(
    namespace="values_conflict",
    initial={"conflicting_values": "", "resolution": ""},
)

FINDING_INSPIRATION = FormSpec(
    namespace="finding_inspiration",
    initial={"inspiring_people": "", "inspiring_qualities": "", "applying_inspiration": ""},
    step_number=37,
    step_name="Finding Inspiration",
    next_step_number=38,
    next_step_name="Revisit Values",
)

BUILD_ON_STRENGTHS = FormSpec(
    namespace="build_on_strengths",
    initial={"top_strengths": "", "using_strengths": ""},
    step_number=42,
    step_name="Build on Your Strengths",
    next_step_number=52,
    next_step_name="Family Strengths",
)

FINANCIAL_RESOURCES = FormSpec(
    namespace="financial_resources",
    initial={
        "income": "",
        "job_stability": "",
        "workplace_benefits": "",
        "flexible_schedule": "",
        "job_satisfaction": "",
        "financial_feelings": "",
        "build_resources": "",
    },
    step_number=50,
    step_name="Financial and Economic Resources",
    next_step_number=51,
    next_step_name="Social Support and Social Competence",
)

FAMILY_STRENGTHS = FormSpec(
    namespace="family_strengths",
    initial={"family_support": "", "family_challenges": "", "family_involvement": ""},
    step_number=52,
    step_name="Family Strengths",
    next_step_number=53,
    next_step_name="Time Management and Personal Structure",
)

BIG_PICTURE_WHY = FormSpec(
    namespace="big_picture_why",
    initial={"deeper_why": "", "life_impact": ""},
    step_number=61,
    step_name="Think About the Big Picture",
    next_step_number=62,
    next_step_name="Where Are You Now?",
)

GETTING_READY = FormSpec(
    namespace="getting_ready",
    initial={"self_persuasion": ""},
)

CONTROL = FormSpec(
    namespace="control",
    initial={"cant_control": "", "can_control": ""},
)

_SMALL_STEPS_INITIAL: dict[str, Any] = {"steps": []}
SMALL_STEPS = FormSpec(
    namespace="small_steps",
    initial=_SMALL_STEPS_INITIAL,
    parse=_parse_string_list("steps", _SMALL_STEPS_INITIAL),
)

VISUALIZE_RESULTS = FormSpec(
    namespace="visualize_results",
    initial={"three_months": "", "six_months": "", "one_year": ""},
)

MONITORING_PROGRESS = FormSpec(
    namespace="monitoring_progress",
    initial={"ratings": {}, "working_well": "", "compliments": ""},
    parse=_parse_monitoring,
)

_RECOMMIT_INITIAL: dict[str, Any] = {"selected_coping_skills": [], "implementation_plan": ""}
SETBACKS_RECOMMIT = FormSpec(
    namespace="setbacks_recommit",
    initial=_RECOMMIT_INITIAL,
    parse=_parse_string_list("selected_coping_skills", _RECOMMIT_INITIAL),
)

CHANGE_PLAN = FormSpec(
    namespace="change_plan",
    initial={
        "vision_statement": "",
        "goals": "",
        "action_steps": "",
        "support_resources": "",
        "obstacles_plan": "",
        "monitoring_progress": "",
        "rewards": "",
    },
)

FINAL_WORD = FormSpec(
    namespace="final_word",
    initial={"adjustments": ""},
    parse=_parse_final_word,
    transform=_dump_final_word,
    step_number=91,
    step_name="A Final Word: Your Journey Begins Now",
)

FORM_SPECS: dict[str, FormSpec] = {
    spec.namespace: spec
    for spec in (
        CLARIFYING_VALUES,
        VALUES_CONFLICT,
        FINDING_INSPIRATION,
        BUILD_ON_STRENGTHS,
        FINANCIAL_RESOURCES,
        FAMILY_STRENGTHS,
        BIG_PICTURE_WHY,
        GETTING_READY,
        CONTROL,
        SMALL_STEPS,
        VISUALIZE_RESULTS,
        MONITORING_PROGRESS,
        SETBACKS_RECOMMIT,
        CHANGE_PLAN,
        FINAL_WORD,
    )
}


def reflection_form(step_id: int) -> FormSpec:
    return FormSpec(namespace=f"step_{step_id}", initial={"response": ""})
