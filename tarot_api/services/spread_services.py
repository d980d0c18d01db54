# tarot_api/services/spread_services.py
from typing import Dict, List, Union

from tarot_api.core.exceptions import InvalidArgument
from tarot_api.models.tarot_models import SpreadType

CARD_COUNTS: Dict[SpreadType, int] = {
    SpreadType.SINGLE: 1,
    SpreadType.THREE_CARD: 3,
    SpreadType.CELTIC_CROSS: 10,
}

CELTIC_CROSS_POSITIONS = [
    "현재 상황", "가능한 결과", "과거의 영향", "잠재의식",
    "가능한 미래", "당신의 접근법", "외부 영향", "희망과 두려움",
    "최종 결과", "조언",
]

# Labels stored on each drawn card
POSITION_NAMES: Dict[SpreadType, List[str]] = {
    SpreadType.SINGLE: ["오늘의 메시지"],
    SpreadType.THREE_CARD: ["과거", "현재", "미래"],
    SpreadType.CELTIC_CROSS: CELTIC_CROSS_POSITIONS,
}

# Labels used as narrative context inside interpretation text
POSITION_CONTEXTS: Dict[SpreadType, List[str]] = {
    SpreadType.SINGLE: ["오늘의 메시지"],
    SpreadType.THREE_CARD: ["과거의 영향", "현재 상황", "미래의 가능성"],
    SpreadType.CELTIC_CROSS: CELTIC_CROSS_POSITIONS,
}


def resolve_spread_type(spread_type: Union[SpreadType, str]) -> SpreadType:
    try:
        return SpreadType(spread_type)
    except ValueError:
        raise InvalidArgument(f"Unknown spread type: {spread_type}")


def required_count(spread_type: Union[SpreadType, str]) -> int:
    return CARD_COUNTS[resolve_spread_type(spread_type)]


def position_label(spread_type: Union[SpreadType, str], index: int) -> str:
    labels = POSITION_NAMES[resolve_spread_type(spread_type)]
    if 0 <= index < len(labels):
        return labels[index]
    return f"위치 {index + 1}"


def context_label(spread_type: Union[SpreadType, str], index: int) -> str:
    """Interpretation-time label; empty for unknown spreads or positions past the table."""
    try:
        labels = POSITION_CONTEXTS[SpreadType(spread_type)]
    except ValueError:
        return ""
    if 0 <= index < len(labels):
        return labels[index]
    return ""
