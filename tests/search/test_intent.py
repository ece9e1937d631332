"""
Tests for the keyword intent classifier.
"""

import pytest

from kgsearch.search.intent import classify_intent
from kgsearch.search.strategies import StrategyKey


class TestClassifyIntent:
    """Tests for classify_intent."""

    @pytest.mark.parametrize("query,expected", [
        ("Tell me about your career", StrategyKey.EMPLOYMENT),
        ("Which company did you join first?", StrategyKey.EMPLOYMENT),
        ("What did you accomplish there? any measurable impact", StrategyKey.ACHIEVEMENT),
        ("Which university did you attend?", StrategyKey.EDUCATION),
        ("Have you managed a team?", StrategyKey.LEADERSHIP),
        ("Projects built with Kubernetes", StrategyKey.TECHNOLOGY),
        ("What is your expertise?", StrategyKey.SKILL),
        ("Any microservice architectures?", StrategyKey.PATTERN),
        ("Show me some code", StrategyKey.GENERAL),
        ("portfolio highlights", StrategyKey.GENERAL),
    ])
    def test_single_group(self, query, expected):
        assert classify_intent(query) == expected

    def test_employment_wins_over_technology(self):
        """'work experience with react' -> employment (priorita')."""
        assert classify_intent("work experience with react") == StrategyKey.EMPLOYMENT

    def test_achievement_wins_over_technology(self):
        assert classify_intent("improved python performance") == StrategyKey.ACHIEVEMENT

    def test_technology_wins_over_skill(self):
        assert classify_intent("experience with docker") == StrategyKey.TECHNOLOGY

    def test_case_insensitive(self):
        assert classify_intent("REACT PROJECTS") == StrategyKey.TECHNOLOGY

    def test_empty_query(self):
        assert classify_intent("") == StrategyKey.GENERAL
