import pytest

from tension_dashboard.core.categorizer import categorize, count_occurrences, score_categories
from tension_dashboard.core.lexicon import Category


def test_empty_text_is_other():
    assert categorize("") is Category.OTHER


def test_text_without_keywords_is_other():
    assert categorize("Cricket fans await the final") is Category.OTHER


def test_military_keywords():
    assert categorize("troops attack near border") is Category.MILITARY


def test_diplomatic_keywords():
    assert categorize("Foreign minister holds peace talks") is Category.DIPLOMATIC


def test_matching_is_case_insensitive():
    assert categorize("MISSILE TEST") is Category.MILITARY


def test_tie_goes_to_first_declared_category():
    # one diplomatic hit ("talks") and one economic hit ("trade")
    scores = score_categories("trade talks")
    assert scores[Category.DIPLOMATIC] == scores[Category.ECONOMIC] == 1
    assert categorize("trade talks") is Category.DIPLOMATIC


def test_highest_total_wins():
    text = "Trade talks stall as tariff and export curbs hit the market"
    assert categorize(text) is Category.ECONOMIC


def test_repeated_keywords_are_counted():
    assert score_categories("border border")[Category.MILITARY] == 2


def test_keywords_match_inside_words():
    assert count_occurrences("war", "warfare and postwar") == 2


def test_scores_cover_every_keyword_category():
    assert set(score_categories("")) == {
        Category.MILITARY, Category.DIPLOMATIC, Category.ECONOMIC, Category.SOCIAL
    }


def test_custom_lexicon():
    lexicon = {Category.SOCIAL: ("cricket",), Category.MILITARY: ("drill",)}
    assert categorize("Cricket match drill cricket", lexicon) is Category.SOCIAL
    assert categorize("troops attack near border", lexicon) is Category.OTHER


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "1234",
    "Refugee camp receives humanitarian aid",
    "Stock market rallies after GDP data",
    "!!! ??? ...",
    "security force deployed",
])
def test_always_returns_a_defined_category(text):
    assert categorize(text) in set(Category)
