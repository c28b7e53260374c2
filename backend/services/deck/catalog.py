"""
Slide catalog - the code-defined base deck.

Each slide is an independent object identified by its `id`. Ids are stable:
edits, custom ordering and share-link snapshots all refer to them, so an id
is never renamed or reused. To add a slide, append it to CATALOG; existing
custom orders pick it up next to its catalog neighbours.
"""

from shared.enums import SlideLayout
from shared.models import Slide

CATALOG: tuple[Slide, ...] = (
    Slide(
        id="slide-01",
        number=1,
        layout=SlideLayout.TITLE,
        title="Kinneret Services",
        subtitle="Building the operating company for back-office services",
        note="Confidential - for discussion purposes only",
    ),
    Slide(
        id="slide-02",
        number=2,
        layout=SlideLayout.SECTION,
        title="The opportunity",
        subtitle="Fragmented, manual and ready for automation",
    ),
    Slide(
        id="slide-03",
        number=3,
        layout=SlideLayout.TEXT,
        title="Why now",
        body=(
            "Thousands of small service firms still run on spreadsheets and email.\n"
            "Owners are retiring, buyers are scarce, and the work itself is highly repeatable."
        ),
        note="Sources: industry association surveys, 2024",
    ),
    Slide(
        id="slide-04",
        number=4,
        layout=SlideLayout.BULLETS,
        title="What we do",
        bullets=[
            "Acquire profitable, founder-owned service firms",
            "Standardize delivery on a shared platform",
            "Automate the repeatable steps, keep the client relationships",
        ],
    ),
    Slide(
        id="slide-05",
        number=5,
        layout=SlideLayout.TWO_COLUMN,
        title="Before and after",
        left_text="Manual intake\nRe-keyed data\nSenior staff on routine work",
        right_text="Structured intake\nOne system of record\nSenior staff on client advice",
    ),
    Slide(
        id="slide-06",
        number=6,
        layout=SlideLayout.TABLE,
        title="Pipeline",
        table_headers=["Target", "Revenue", "Stage"],
        table_rows=[
            ["Firm A", "$2.1M", "LOI signed"],
            ["Firm B", "$1.4M", "Diligence"],
            ["Firm C", "$3.0M", "First meeting"],
        ],
        note="Figures are trailing twelve months",
    ),
    Slide(
        id="slide-07",
        number=7,
        layout=SlideLayout.BIG_TEXT,
        title="Services, run like a factory",
    ),
    Slide(
        id="slide-08",
        number=8,
        layout=SlideLayout.BULLETS,
        title="The raise",
        subtitle="Use of funds",
        bullets=[
            "First two acquisitions",
            "Platform engineering team",
            "Integration playbook",
        ],
    ),
)


def get_catalog() -> tuple[Slide, ...]:
    """Return the base deck. Callers must treat the slides as read-only."""
    return CATALOG
