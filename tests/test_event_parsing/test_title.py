"""Tests for title extraction."""

from src.event_parsing.title import extract_title


class TestShortText:
    """Text of 60 characters or fewer is used whole."""

    def test_unchanged(self):
        assert extract_title("Lunch with Sam tomorrow") == "Lunch with Sam tomorrow"

    def test_whitespace_collapsed(self):
        assert extract_title("  Team   sync \n\t tomorrow  ") == "Team sync tomorrow"

    def test_exactly_sixty_characters(self):
        text = "a" * 60
        assert extract_title(text) == text

    def test_empty(self):
        assert extract_title("") == ""
        assert extract_title("   ") == ""


class TestFirstSentence:
    """Longer text falls back to its first sentence."""

    def test_period(self):
        text = (
            "Quarterly planning meeting with the whole product team. "
            "We will review roadmap items and assign owners for each."
        )
        assert extract_title(text) == "Quarterly planning meeting with the whole product team."

    def test_exclamation(self):
        text = (
            "Launch party for the new product line at the main office! "
            "Bring friends and family along for the evening."
        )
        assert extract_title(text) == "Launch party for the new product line at the main office!"

    def test_unpunctuated_text_under_limit(self):
        """Without a terminator the whole text counts as one sentence."""
        text = "Doctor appointment January 15, 2025 at 10:30 AM for 45 minutes"
        assert len(text) > 60
        assert extract_title(text) == text


class TestTruncation:
    """Long first sentences are cut to 60 characters."""

    def test_cut_at_word_boundary(self):
        text = "alpha " * 30
        assert extract_title(text) == ("alpha " * 10).strip() + "..."

    def test_no_spaces(self):
        text = "x" * 120
        assert extract_title(text) == "x" * 60 + "..."

    def test_space_too_early(self):
        """A last space before index 30 is ignored."""
        text = "a " + "b" * 150
        assert extract_title(text) == ("a " + "b" * 58) + "..."

    def test_result_length_bounded(self):
        text = "word " * 100
        assert len(extract_title(text)) <= 63
