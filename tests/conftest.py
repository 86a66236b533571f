from pathlib import Path
from typing import Callable, Optional

import pytest
from lxml import etree

PLAN_TEMPLATE = """
<fullPlanDataArray>
  <plan>
    <briefPlan>
{fields}
    </briefPlan>
  </plan>
</fullPlanDataArray>"""

MISSING = object()


def brief_plan_xml(
    database_uid: object = "UID-100",
    approved_plan_trial_uid: object = "TRIAL-1",
    plan_delivery_type: object = "Helical",
    type_of_plan: object = "PATIENT",
) -> str:
    """Return one fullPlanDataArray entry; pass ``MISSING`` to drop a field."""
    fields = []
    if approved_plan_trial_uid is not MISSING:
        fields.append(f"<approvedPlanTrialUID>{approved_plan_trial_uid}</approvedPlanTrialUID>")
    if plan_delivery_type is not MISSING:
        fields.append(f"<planDeliveryType>{plan_delivery_type}</planDeliveryType>")
    if type_of_plan is not MISSING:
        fields.append(f"<typeOfPlan>{type_of_plan}</typeOfPlan>")
    if database_uid is not MISSING:
        fields.append(f"<dbInfo><databaseUID>{database_uid}</databaseUID></dbInfo>")
    return PLAN_TEMPLATE.format(fields="\n".join(f"      {field}" for field in fields))


def archive_xml(*plans: str) -> str:
    """Wrap brief plan entries in a minimal patient archive document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<PatientDataArchive>\n"
        "  <patient>\n"
        "    <fullPlanDataArray>\n"
        + "".join(plans)
        + "\n    </fullPlanDataArray>\n"
        "  </patient>\n"
        "</PatientDataArchive>\n"
    )


def make_tree(*plans: str) -> etree._ElementTree:
    return etree.ElementTree(etree.fromstring(archive_xml(*plans).encode("utf-8")))


@pytest.fixture
def write_archive(tmp_path: Path) -> Callable[..., Path]:
    """Write an archive built from brief plan entries and return its path."""

    def _write(*plans: str, name: str = "Anon_0001_patient.xml", content: Optional[str] = None) -> Path:
        archive_path = tmp_path / name
        archive_path.write_text(content if content is not None else archive_xml(*plans), encoding="utf-8")
        return archive_path

    return _write
