"""Registry of the tools shown on the dashboard home page."""

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class Tool:
    id: str
    name: str
    category: str
    icon: str
    description: str


CALCULATORS = "calculators"

TOOLS: List[Tool] = [
    Tool(
        id="s-corp-tax-calculator",
        name="S-Corp Tax Calculator",
        category=CALCULATORS,
        icon="🧮",
        description="Calculate S-Corp taxes with ease",
    ),
    Tool(
        id="llc-tax-calculator",
        name="LLC Tax Calculator",
        category=CALCULATORS,
        icon="🧾",
        description="Calculate LLC taxes with ease",
    ),
]

CATEGORIES = [
    {"id": "all", "name": "All Gadgets", "count": len(TOOLS)},
    {
        "id": CALCULATORS,
        "name": "Calculators",
        "count": sum(1 for t in TOOLS if t.category == CALCULATORS),
    },
]


def filter_tools(search: str = "", category: str = "all", tools: Sequence[Tool] = TOOLS) -> List[Tool]:
    """Tools in ``category`` ("all" for every one) whose name or description contains ``search``."""
    needle = (search or "").strip().lower()
    return [
        t for t in tools
        if (category == "all" or t.category == category)
        and (needle in t.name.lower() or needle in t.description.lower())
    ]


def get_tool(tool_id: str) -> Tool:
    for t in TOOLS:
        if t.id == tool_id:
            return t
    raise KeyError(tool_id)
