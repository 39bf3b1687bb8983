"""Unit tests for card-name similarity."""

import pytest

from conftest import make_card
from pokesnipe.match.similarity import best_name_match, calculate_name_similarity, normalize_name


class TestNameSimilarity:
    """Test the similarity ladder."""

    def test_identical_after_normalisation(self):
        assert calculate_name_similarity("Ho-Oh", "ho oh") == 1.0

    def test_containment(self):
        assert calculate_name_similarity("Charizard", "Charizard ex") == 0.85

    def test_shared_alias(self):
        assert calculate_name_similarity("Mew Two GX", "Mewtwo GX") == 0.9

    def test_token_jaccard(self):
        score = calculate_name_similarity("Lugia Legend Top", "Lugia V")

        assert score == pytest.approx(1 / 3)

    def test_unrelated(self):
        assert calculate_name_similarity("Blastoise", "Pikachu") == 0.0

    @pytest.mark.parametrize("parsed,catalog,expected", [
        ("Nidoran F", "Nidoran♂", 0.0),
        ("Nidoran♀", "Nidoran F", 1.0),
        ("Nidoran", "Nidoran♀", 0.8),
    ])
    def test_nidoran_genders(self, parsed, catalog, expected):
        assert calculate_name_similarity(parsed, catalog) == expected

    def test_normalize_name(self):
        assert normalize_name("Farfetch’d  (Holo)") == "farfetch'd holo"


class TestBestNameMatch:
    """Test candidate selection by name."""

    def test_picks_highest(self):
        cards = [make_card(card_id="base1-2", name="Blastoise"), make_card()]

        assert best_name_match("Charizard", cards, 0.3).id == "base1-4"

    def test_threshold(self):
        cards = [make_card(name="Blastoise")]

        assert best_name_match("Charizard", cards, 0.3) is None

    def test_tie_goes_to_closer_spelling(self):
        cards = [make_card(card_id="a", name="Charizard ex"), make_card(card_id="b", name="Charizard V")]

        assert best_name_match("Charizard", cards, 0.5).id == "b"
