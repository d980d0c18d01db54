# tests/test_interpretation_services.py
from types import SimpleNamespace

import pytest

from tarot_api.models.tarot_models import CardAspects, SpreadType
from tarot_api.services.draw_services import DrawnSample
from tarot_api.services.interpretation_services import (
    CARD_FALLBACK,
    COSMIC_WISDOM,
    DEFAULT_MEANING,
    MYSTICAL_ADVICE,
    OVERALL_FALLBACK,
    REVERSED_ENHANCEMENT,
    UPRIGHT_ENHANCEMENTS,
    InterpretationSynthesizer,
    mentions,
)


@pytest.fixture
def synthesizer(rng):
    return InterpretationSynthesizer(rng=rng)


@pytest.fixture
def fool(deck):
    return deck[0]


def test_interpret_one_prefixes_position_context(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.THREE_CARD, 0)

    assert text.startswith(f"[과거의 영향] {fool.upright.general}")


def test_interpret_one_upright_ends_with_pool_sentence(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0)

    assert any(text.endswith(sentence.format(name=fool.name_kr)) for sentence in UPRIGHT_ENHANCEMENTS)


def test_interpret_one_reversed_uses_reversed_meaning(synthesizer, fool):
    text = synthesizer.interpret_one(fool, True, SpreadType.SINGLE, 0)

    assert fool.reversed.general in text
    assert text.endswith(REVERSED_ENHANCEMENT.format(name=fool.name_kr))


@pytest.mark.parametrize(
    "question, label, field",
    [
        ("오늘 나의 연애운은?", "연애/관계 측면에서", "love"),
        ("Will my Relationship last?", "연애/관계 측면에서", "love"),
        ("이직해도 될까요? 직업 고민", "직업/사업 측면에서", "career"),
        ("How is my health?", "건강 측면에서", "health"),
    ],
)
def test_interpret_one_adds_question_topic(synthesizer, fool, question, label, field):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0, question)

    assert f"{label} {getattr(fool.upright, field)}" in text


def test_relationship_topic_wins_over_career(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0, "love or career?")

    assert "연애/관계 측면에서" in text
    assert "직업/사업 측면에서" not in text


def test_unmatched_question_adds_nothing(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0, "what should I eat?")

    assert "측면에서" not in text


def test_missing_general_meaning_falls_back(synthesizer, fool):
    blank = fool.model_copy(update={"upright": CardAspects()})

    text = synthesizer.interpret_one(blank, False, SpreadType.SINGLE, 0)

    assert text.startswith(f"[오늘의 메시지] {DEFAULT_MEANING}")


def test_position_past_table_has_no_prefix(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 4)

    assert text.startswith(fool.upright.general)


def test_broken_card_degrades_to_fallback(synthesizer):
    card = SimpleNamespace(name="Broken", name_kr="부서진 카드")

    assert synthesizer.interpret_one(card, False, SpreadType.SINGLE, 0) == CARD_FALLBACK.format(name="부서진 카드")


def test_single_overall_quotes_question(synthesizer, fool):
    message, advice = synthesizer.interpret_overall([DrawnSample(fool, False)], SpreadType.SINGLE, "내일은?")

    assert message.startswith(f"{fool.name_kr}이 오늘 당신에게 전하는 메시지입니다.")
    assert '"내일은?"에 대한 답으로서,' in message
    assert "외향적 행동" in message
    assert any(message.endswith(wisdom) for wisdom in COSMIC_WISDOM)
    assert any(keyword in advice for keyword in fool.keywords_kr)
    assert any(advice.endswith(line) for line in MYSTICAL_ADVICE)


def test_single_overall_reversed_points_inward(synthesizer, fool):
    message, _ = synthesizer.interpret_overall([DrawnSample(fool, True)], SpreadType.SINGLE)

    assert "내면의 성찰" in message
    assert "답으로서" not in message


@pytest.mark.parametrize(
    "orientations, opening",
    [
        ((False, False, False), "모든 카드가 정방향"),
        ((True, True, True), "모든 카드가 역방향"),
        ((True, False, False), "정방향과 역방향 카드가 균형"),
    ],
)
def test_three_card_advice_follows_orientations(synthesizer, deck, orientations, opening):
    drawn = [DrawnSample(card, reversed) for card, reversed in zip(deck[:3], orientations)]

    message, advice = synthesizer.interpret_overall(drawn, SpreadType.THREE_CARD)

    assert message.startswith(f"과거({deck[0].name_kr}), 현재({deck[1].name_kr}), 미래({deck[2].name_kr})")
    assert advice.startswith(opening)


def test_celtic_cross_names_outcome_and_advice_cards(synthesizer, deck):
    drawn = [DrawnSample(card, False) for card in deck[:10]]

    message, advice = synthesizer.interpret_overall(drawn, SpreadType.CELTIC_CROSS)

    assert deck[0].name_kr in message
    assert deck[8].name_kr in message
    assert advice.startswith(f"조언의 위치에 있는 {deck[9].name_kr}")


def test_unknown_spread_lists_card_names(synthesizer, deck):
    drawn = [DrawnSample(card, False) for card in deck[:2]]

    message, _ = synthesizer.interpret_overall(drawn, "FIVE_CARD")

    assert message.startswith(f"뽑힌 카드들({deck[0].name_kr}, {deck[1].name_kr})")


def test_overall_degrades_to_fallback(synthesizer):
    assert synthesizer.interpret_overall([], SpreadType.SINGLE) == OVERALL_FALLBACK


@pytest.mark.parametrize(
    "question",
    ["Does nobody understand me?", "Should I finish my homework?", "Is the network down?", "Will somebody call?"],
)
def test_topic_words_inside_longer_words_do_not_match(synthesizer, fool, question):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0, question)

    assert "측면에서" not in text


def test_topic_word_matches_as_whole_word(synthesizer, fool):
    text = synthesizer.interpret_one(fool, False, SpreadType.SINGLE, 0, "Is my work going well?")

    assert f"직업/사업 측면에서 {fool.upright.career}" in text


@pytest.mark.parametrize(
    "word, text, expected",
    [("work", "my work", True), ("work", "homework", False), ("body", "nobody", False), ("연애", "나의연애운", True)],
)
def test_mentions(word, text, expected):
    assert mentions(word, text) is expected
