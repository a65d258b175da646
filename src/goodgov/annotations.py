"""Editorial annotations attached to particular country-year points.

Annotations are keyed by "{country}:{y metric}:{x metric}:{scale}" so
a note only appears on the chart it was written for.
"""

from typing import Dict, List, NamedTuple


class Annotation(NamedTuple):
    year: int
    text: str
    dx: int
    dy: int


_GREAT_RECESSION = "The Great Recession."
_SINGAPORE = (
    "Singapore has one of the most open and least corrupt economies in the world."
)
_AZERBAIJAN = "Researchers suggest low Gini values are due to data collection issues."

ANNOTATIONS: Dict[str, List[Annotation]] = {
    "Norway:hdi:gdp:local": [
        Annotation(2015, "Falling oil prices impact GDP.", 47, -21)
    ],
    "United Kingdom:hdi:gdp:local": [Annotation(2009, _GREAT_RECESSION, -38, -26)],
    "Sweden:hdi:gdp:local": [Annotation(2009, _GREAT_RECESSION, -9, -46)],
    "Libya:hdi:gdp:local": [Annotation(2011, "First Libyan Civil War.", 0, -139)],
    "Iraq:hdi:gdp:local": [
        Annotation(
            2003, "US invades of Iraq for weapons of mass destruction.", 0, -139
        )
    ],
    "Zimbabwe:hdi:gdp:local": [
        Annotation(
            2009,
            "Power-sharing agreement between president and prime minister.",
            0,
            -109,
        )
    ],
    "Singapore:hdi:gdp:global": [Annotation(2010, _SINGAPORE, -5, 97)],
    "Singapore:efree:gdp:global": [Annotation(2010, _SINGAPORE, -5, 97)],
    "Azerbaijan:gini:gdp:local": [Annotation(2002, _AZERBAIJAN, 59, -41)],
    "Azerbaijan:gini:hdi:local": [Annotation(2002, _AZERBAIJAN, 59, -41)],
    "Azerbaijan:hdi:gini:local": [Annotation(2002, _AZERBAIJAN, 59, -41)],
    "Azerbaijan:gini:efree:local": [Annotation(2002, _AZERBAIJAN, 59, -41)],
    "Azerbaijan:gini:gdp:global": [Annotation(2002, _AZERBAIJAN, 59, -41)],
    "Azerbaijan:hdi:gini:global": [Annotation(2002, _AZERBAIJAN, 65, 31)],
    "Azerbaijan:gini:efree:global": [Annotation(2002, _AZERBAIJAN, -26, -38)],
    "El Salvador:efree:gdp:local": [
        Annotation(
            2011,
            "Bureaucracy, corruption, and government interference "
            "has eroded Economic Freedom.",
            4,
            -43,
        )
    ],
    "Sudan:hdi:gdp:local": [Annotation(2013, "South Sudanese Civil War.", -1, 71)],
    "Haiti:hdi:gdp:local": [Annotation(2010, "2010 Haiti earthquake.", 0, -90)],
}


def annotation_key(country: str, y_metric: str, x_metric: str, scale: str) -> str:
    return f"{country}:{y_metric}:{x_metric}:{scale}"


def annotations_for(
    country: str, y_metric: str, x_metric: str, scale: str
) -> List[Annotation]:
    """Annotations for one country on one chart; empty when there are none."""
    return list(ANNOTATIONS.get(annotation_key(country, y_metric, x_metric, scale), []))
