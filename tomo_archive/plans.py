from __future__ import annotations

# Purpose: Select approved, deliverable treatment plans from patient archives.
# Date: 2026-10-19
# Related tests: tests/test_plans.py

"""Brief plan parsing and approved plan filtering for TomoTherapy archives.

A patient archive lists every plan under
``fullPlanDataArray/fullPlanDataArray/plan/briefPlan``. Only plans with an
approved plan trial, helical delivery and a ``PATIENT`` plan type (which
excludes DQA plans) are returned by :func:`filter_approved_plans`.
"""

from typing import TypedDict

from lxml import etree

from .common import ArchiveNode, first_child_text, xpath_elements

__all__ = [
    "BRIEF_PLAN_XPATH",
    "PlanData",
    "filter_approved_plans",
    "find_brief_plans",
    "is_approved_plan",
    "parse_brief_plans",
]

BRIEF_PLAN_XPATH = "//fullPlanDataArray/fullPlanDataArray/plan/briefPlan"

APPROVED_TRIAL_XPATH = "approvedPlanTrialUID"
DELIVERY_TYPE_XPATH = "planDeliveryType"
PLAN_TYPE_XPATH = "typeOfPlan"
DATABASE_UID_XPATH = "dbInfo/databaseUID"

HELICAL_DELIVERY = "Helical"
PATIENT_PLAN = "PATIENT"


class PlanData(TypedDict):
    """Summary fields of one brief plan; ``None`` marks a missing element."""

    database_uid: str | None
    approved_plan_trial_uid: str | None
    plan_delivery_type: str | None
    type_of_plan: str | None
    approved: bool


def find_brief_plans(document: ArchiveNode) -> list[etree._Element]:
    """Return every brief plan element in document order."""
    return xpath_elements(document, BRIEF_PLAN_XPATH)


def is_approved_plan(brief_plan: etree._Element) -> bool:
    """Return True when a brief plan is an approved helical patient plan.

    Checks run in order and stop at the first failure:

    1. ``approvedPlanTrialUID`` is present and non-empty.
    2. ``planDeliveryType`` is exactly ``Helical``.
    3. ``typeOfPlan`` is exactly ``PATIENT``.
    4. ``dbInfo/databaseUID`` is present (it may be empty).
    """
    if not first_child_text(brief_plan, APPROVED_TRIAL_XPATH):
        return False
    if first_child_text(brief_plan, DELIVERY_TYPE_XPATH) != HELICAL_DELIVERY:
        return False
    if first_child_text(brief_plan, PLAN_TYPE_XPATH) != PATIENT_PLAN:
        return False
    return first_child_text(brief_plan, DATABASE_UID_XPATH) is not None


def filter_approved_plans(document: ArchiveNode) -> list[str]:
    """Return the database UIDs of approved plans in a patient archive.

    Args:
        document: Parsed patient archive (tree or root element).

    Returns:
        list[str]: Plan UIDs in document order. Empty when nothing qualifies.

    Raises:
        PlanQueryError: If the document cannot be queried.
    """
    plans: list[str] = []
    for brief_plan in find_brief_plans(document):
        if not is_approved_plan(brief_plan):
            continue
        plans.append(first_child_text(brief_plan, DATABASE_UID_XPATH) or "")
    return plans


def parse_brief_plans(document: ArchiveNode) -> list[PlanData]:
    """Return the summary fields of every brief plan, approved or not."""
    records: list[PlanData] = []
    for brief_plan in find_brief_plans(document):
        records.append(
            {
                "database_uid": first_child_text(brief_plan, DATABASE_UID_XPATH),
                "approved_plan_trial_uid": first_child_text(brief_plan, APPROVED_TRIAL_XPATH),
                "plan_delivery_type": first_child_text(brief_plan, DELIVERY_TYPE_XPATH),
                "type_of_plan": first_child_text(brief_plan, PLAN_TYPE_XPATH),
                "approved": is_approved_plan(brief_plan),
            }
        )
    return records
