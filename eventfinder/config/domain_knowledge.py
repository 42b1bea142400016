"""Static keyword tables used by the heuristic query parser.

The category table is ordered: the first keyword found in a query decides
the category, so more specific keywords ("hackathon") come before broad
ones ("tech").  Values are the category labels used in the dataset; the
filter engine matches them loosely (bidirectional substring), so a label
only needs to be close to the dataset's spelling.

These defaults can be overridden from ``config/config.yaml`` under the
``query_parser`` key (see :func:`eventfinder.config.loader.load_config`).
"""

from __future__ import annotations

FREE_KEYWORDS: tuple[str, ...] = ("free", "no cost", "$0")
PAID_KEYWORDS: tuple[str, ...] = ("paid", "cost", "$")

CATEGORY_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("hackathon", "Hackathon"),
    ("workshop", "Workshop"),
    ("meetup", "Networking & Community"),
    ("networking", "Networking & Community"),
    ("conference", "Conference"),
    ("startup", "Startup & Entrepreneurship"),
    ("entrepreneurship", "Startup & Entrepreneurship"),
    ("ai", "Tech & AI"),
    ("machine learning", "Tech & AI"),
    ("tech", "Tech & AI"),
    ("technology", "Tech & AI"),
    ("seminar", "Seminar"),
    ("webinar", "Webinar"),
    ("panel", "Panel Discussion"),
    ("discussion", "Panel Discussion"),
    ("lecture", "Lecture"),
    ("training", "Training"),
    ("course", "Training"),
    ("education", "Education & Research"),
    ("research", "Education & Research"),
    ("career", "Career & Skills"),
    ("skills", "Career & Skills"),
    ("finance", "Finance & Business"),
    ("business", "Finance & Business"),
    ("marketing", "Marketing & Branding"),
    ("branding", "Marketing & Branding"),
)


def category_keywords_from_config(config: dict) -> tuple[tuple[str, str], ...]:
    """Return the category table from a loaded config dict, or the defaults.

    The YAML form is a list of single-entry mappings so the order survives::

        query_parser:
          category_keywords:
            - hackathon: Hackathon
            - workshop: Workshop
    """
    raw = (config.get("query_parser") or {}).get("category_keywords")
    if not raw:
        return CATEGORY_KEYWORDS

    table: list[tuple[str, str]] = []
    for entry in raw:
        if isinstance(entry, dict):
            table.extend((str(k).lower(), str(v)) for k, v in entry.items())
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            table.append((str(entry[0]).lower(), str(entry[1])))
    return tuple(table) or CATEGORY_KEYWORDS
