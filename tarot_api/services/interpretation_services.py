# tarot_api/services/interpretation_services.py
import logging
import random
import re
from typing import Optional, Sequence, Tuple, Union

from tarot_api.models.tarot_models import CardSchema, SpreadType
from tarot_api.services.spread_services import context_label

logger = logging.getLogger(__name__)

DEFAULT_MEANING = "카드의 에너지가 당신에게 메시지를 전합니다."

# (aspect field, label, vocabulary) in match priority order
QUESTION_TOPICS = [
    ("love", "연애/관계 측면에서", ("love", "romance", "relationship", "dating", "partner", "사랑", "연애", "관계")),
    ("career", "직업/사업 측면에서", ("career", "job", "work", "business", "직업", "일", "사업", "커리어")),
    ("health", "건강 측면에서", ("health", "body", "wellness", "건강", "몸")),
]

UPRIGHT_ENHANCEMENTS = [
    " {name}의 신비로운 에너지가 당신을 인도합니다.",
    " 우주의 리듬에 맞춰 {name}의 지혜를 받아들이세요.",
    " {name}이 전하는 고대의 지혜에 마음을 열어보세요.",
    " 별들의 속삭임이 {name}을 통해 당신에게 닿습니다.",
]

REVERSED_ENHANCEMENT = " 역방향의 {name}은 내면의 성찰과 변화의 필요성을 나타냅니다."

CARD_FALLBACK = "{name}의 신비로운 에너지가 당신의 질문에 답하고자 합니다. 직감을 믿고 카드의 상징을 깊이 묵상해보세요."

COSMIC_WISDOM = [
    "별들이 당신의 길을 비춰줄 것입니다.",
    "우주의 리듬에 맞춰 흘러가세요.",
    "달빛 아래서 진정한 답을 찾게 될 것입니다.",
    "고대의 지혜가 현재의 당신을 인도합니다.",
    "신비로운 에너지가 당신을 둘러싸고 있습니다.",
]

MYSTICAL_ADVICE = [
    "직감을 믿고 내면의 목소리에 귀 기울이세요.",
    "명상과 성찰을 통해 더 깊은 통찰을 얻으세요.",
    "우주의 흐름에 자신을 맡기고 받아들이세요.",
    "카드의 상징들을 마음에 새기고 일상에서 실천하세요.",
    "신비로운 동조화의 힘을 믿고 행동하세요.",
]

OVERALL_FALLBACK = (
    "우주의 신비로운 에너지가 당신을 둘러싸고 있습니다. 카드들이 전하는 메시지를 마음으로 느껴보세요.",
    "직감을 믿고 내면의 목소리에 귀 기울이세요. 답은 이미 당신 안에 있습니다.",
)


def mentions(word: str, text: str) -> bool:
    """Latin-script words match on word boundaries; Korean words match as substrings."""
    if word.isascii():
        return re.search(rf"\b{re.escape(word)}\b", text) is not None
    return word in text


class InterpretationSynthesizer:
    """
    Builds Korean interpretation text for single cards and whole readings.

    Synthesis never raises: any internal fault degrades to a fixed fallback text.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.SystemRandom()

    def interpret_one(
        self,
        card: CardSchema,
        reversed: bool,
        spread_type: Union[SpreadType, str],
        position: int,
        question: Optional[str] = None,
    ) -> str:
        logger.debug(f"Interpreting {card.name} ({'reversed' if reversed else 'upright'}) at position {position}")

        try:
            interpretation = card.aspects(reversed).general or DEFAULT_MEANING

            position_context = context_label(spread_type, position)
            if position_context:
                interpretation = f"[{position_context}] {interpretation}"

            question_context = self._question_context(card, question, reversed) if question else ""
            if question_context:
                interpretation += f" {question_context}"

            interpretation += self._mystical_enhancement(card, reversed)
            return interpretation

        except Exception as e:
            logger.error(f"Failed to interpret card {getattr(card, 'name', card)}: {e}", exc_info=True)
            return CARD_FALLBACK.format(name=getattr(card, "name_kr", "카드"))

    def interpret_overall(
        self,
        drawn_cards: Sequence,
        spread_type: Union[SpreadType, str],
        question: Optional[str] = None,
    ) -> Tuple[str, str]:
        """
        Returns (overall_message, advice) for a full reading.

        `drawn_cards` items need `.card` and `.reversed`, ordered by position.
        """
        logger.info(f"Generating overall interpretation for {spread_type} spread")

        try:
            if spread_type == SpreadType.SINGLE:
                overall_message = self._single_card_message(drawn_cards[0], question)
                advice = self._single_card_advice(drawn_cards[0])
            elif spread_type == SpreadType.THREE_CARD:
                overall_message = self._three_card_message(drawn_cards)
                advice = self._three_card_advice(drawn_cards)
            elif spread_type == SpreadType.CELTIC_CROSS:
                overall_message = self._celtic_cross_message(drawn_cards)
                advice = self._celtic_cross_advice(drawn_cards)
            else:
                card_names = ", ".join(drawn.card.name_kr for drawn in drawn_cards)
                overall_message = f"뽑힌 카드들({card_names})이 우주의 메시지를 전달하고 있습니다."
                advice = "직감을 믿고 카드들이 주는 지혜를 마음에 새기세요."

            overall_message += f" {self.rng.choice(COSMIC_WISDOM)}"
            advice += f" {self.rng.choice(MYSTICAL_ADVICE)}"
            return overall_message, advice

        except Exception as e:
            logger.error(f"Failed to generate overall reading: {e}", exc_info=True)
            return OVERALL_FALLBACK

    def _question_context(self, card: CardSchema, question: str, reversed: bool) -> str:
        question_lower = question.lower()
        aspects = card.aspects(reversed)

        for field, label, vocabulary in QUESTION_TOPICS:
            if any(mentions(word, question_lower) for word in vocabulary):
                meaning = getattr(aspects, field)
                return f"{label} {meaning}" if meaning else ""
        return ""

    def _mystical_enhancement(self, card: CardSchema, reversed: bool) -> str:
        if reversed:
            return REVERSED_ENHANCEMENT.format(name=card.name_kr)
        return self.rng.choice(UPRIGHT_ENHANCEMENTS).format(name=card.name_kr)

    def _single_card_message(self, drawn, question: Optional[str]) -> str:
        message = f"{drawn.card.name_kr}이 오늘 당신에게 전하는 메시지입니다."
        if question:
            message += f' "{question}"에 대한 답으로서,'
        message += f" 이 카드는 {'내면의 성찰' if drawn.reversed else '외향적 행동'}을 통한 성장을 제시합니다."
        return message

    def _single_card_advice(self, drawn) -> str:
        keywords = drawn.card.keywords_kr or []
        if keywords:
            keyword = self.rng.choice(keywords)
            return f"{keyword}의 에너지를 마음에 품고 하루를 시작하세요."
        return f"{drawn.card.name_kr}의 지혜를 따라 직감을 믿고 행동하세요."

    def _three_card_message(self, drawn_cards: Sequence) -> str:
        past, present, future = drawn_cards[:3]
        return (
            f"과거({past.card.name_kr}), 현재({present.card.name_kr}), 미래({future.card.name_kr})의 "
            "연결고리가 당신의 운명을 이루고 있습니다. "
            "과거의 경험이 현재의 선택에 영향을 주고, 이는 밝은 미래로 이어질 것입니다."
        )

    def _three_card_advice(self, drawn_cards: Sequence) -> str:
        reversed_count = sum(1 for drawn in drawn_cards if drawn.reversed)

        if reversed_count == 0:
            return "모든 카드가 정방향으로 나타났습니다. 우주의 에너지가 당신을 강력히 지지하고 있으니 자신감을 가지고 나아가세요."
        if reversed_count == len(drawn_cards):
            return "모든 카드가 역방향입니다. 내면의 성찰과 기다림이 필요한 시기입니다. 서두르지 말고 때를 기다리세요."
        return "정방향과 역방향 카드가 균형을 이루고 있습니다. 외적 행동과 내적 성찰의 조화를 통해 균형잡힌 해답을 찾으세요."

    def _celtic_cross_message(self, drawn_cards: Sequence) -> str:
        center, outcome = drawn_cards[0], drawn_cards[8]
        return (
            f"현재 상황을 나타내는 {center.card.name_kr}와 최종 결과인 {outcome.card.name_kr}이 "
            "보여주는 당신의 운명의 길입니다. "
            "열 장의 카드가 그려내는 복잡한 상황 속에서도 우주는 명확한 방향을 제시하고 있습니다."
        )

    def _celtic_cross_advice(self, drawn_cards: Sequence) -> str:
        advice_card = drawn_cards[9]
        return (
            f"조언의 위치에 있는 {advice_card.card.name_kr}이 말합니다: "
            "복잡해 보이는 상황도 한 걸음씩 차근차근 풀어나가면 됩니다. "
            "카드들이 보여주는 각각의 측면을 이해하고 전체적인 그림을 그려보세요."
        )
