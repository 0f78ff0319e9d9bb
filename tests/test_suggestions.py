"""Tests for follow-up suggestions derived from completion text"""
from interview_mentor.services.suggestions import FollowUpFamily, FollowUpSuggester, default_suggester


def test_system_design_text():
    suggester = default_suggester()
    assert suggester.suggest("Start the system design by clarifying scale.") == [
        "Practice designing a chat system",
        "Learn about load balancing",
        "Study database sharding",
        "Understand caching strategies",
    ]


def test_coding_text():
    suggestions = default_suggester().suggest("Pick an algorithm with O(n) time.")
    assert suggestions[0] == "Practice two-pointer problems"


def test_behavioral_text():
    suggestions = default_suggester().suggest("Behavioral rounds reward structured stories.")
    assert suggestions == [
        "Prepare STAR stories",
        "Practice leadership examples",
        "Work on conflict resolution",
        "Develop teamwork scenarios",
    ]


def test_salary_or_career_text():
    assert default_suggester().suggest("Your career path matters")[0] == "Research salary ranges"


def test_priority_order_prefers_system_design_over_coding():
    text = "Coding rounds come after the system design round."
    assert default_suggester().suggest(text)[0] == "Practice designing a chat system"


def test_generic_list_when_nothing_matches():
    assert default_suggester().suggest("Good luck!") == [
        "Ask about specific companies",
        "Practice coding problems",
        "Prepare behavioral stories",
        "Schedule mock interviews",
    ]


def test_truncates_to_four():
    suggester = FollowUpSuggester(
        [FollowUpFamily(name="long", keywords=("long",), suggestions=tuple("abcdefg"))],
        default=list("uvwxyz"),
    )
    assert suggester.suggest("a long answer") == ["a", "b", "c", "d"]
    assert suggester.suggest("short") == ["u", "v", "w", "x"]
