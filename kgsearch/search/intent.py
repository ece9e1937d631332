"""
Intent Classifier
=================

Keyword-based selection of a graph strategy from free text.

Keyword groups are tested in a fixed priority order and the first group
with a substring match wins (no scoring):

    employment -> achievement -> education -> leadership
    -> technology -> skill -> pattern -> code -> general

Employment comes first so that "work experience with react" resolves to
employment rather than technology or skill.
"""

from enum import Enum
from typing import Tuple, Type

from kgsearch.search.strategies import StrategyKey


class EmploymentKeywords(str, Enum):
    WORK_EXPERIENCE = "work experience"
    EMPLOYMENT = "employment"
    CAREER = "career"
    JOB = "job"
    WORKED_AT = "worked at"
    COMPANY = "company"
    EMPLOYER = "employer"
    POSITION = "position"


class AchievementKeywords(str, Enum):
    ACHIEVEMENT = "achievement"
    ACCOMPLISHED = "accomplished"
    IMPACT = "impact"
    IMPROVED = "improved"
    INCREASED = "increased"
    REDUCED = "reduced"
    DELIVERED = "delivered"
    SAVED = "saved"


class EducationKeywords(str, Enum):
    EDUCATION = "education"
    DEGREE = "degree"
    UNIVERSITY = "university"
    STUDIED = "studied"
    QUALIFICATION = "qualification"
    GRADUATED = "graduated"


class LeadershipKeywords(str, Enum):
    LEADERSHIP = "leadership"
    TEAM = "team"
    MANAGEMENT = "management"
    LEAD = "lead"
    MENTOR = "mentor"


class TechnologyKeywords(str, Enum):
    REACT = "react"
    TYPESCRIPT = "typescript"
    PYTHON = "python"
    NODE = "node"
    AWS = "aws"
    DOCKER = "docker"
    KUBERNETES = "kubernetes"
    NEO4J = "neo4j"
    NEXTJS = "next.js"


class SkillKeywords(str, Enum):
    EXPERIENCE_WITH = "experience with"
    SKILLS_IN = "skills in"
    PROFICIENT_IN = "proficient in"
    EXPERTISE = "expertise"


class PatternKeywords(str, Enum):
    MVC = "mvc"
    MICROSERVICE = "microservice"
    REST = "rest"
    GRAPHQL = "graphql"
    SINGLETON = "singleton"
    FACTORY = "factory"


class CodeKeywords(str, Enum):
    CODE = "code"
    IMPLEMENTATION = "implementation"
    FUNCTION = "function"
    SOURCE = "source"
    EXAMPLE = "example"


# Priority order matters: first match wins
INTENT_PRIORITY: Tuple[Tuple[Type[Enum], StrategyKey], ...] = (
    (EmploymentKeywords, StrategyKey.EMPLOYMENT),
    (AchievementKeywords, StrategyKey.ACHIEVEMENT),
    (EducationKeywords, StrategyKey.EDUCATION),
    (LeadershipKeywords, StrategyKey.LEADERSHIP),
    (TechnologyKeywords, StrategyKey.TECHNOLOGY),
    (SkillKeywords, StrategyKey.SKILL),
    (PatternKeywords, StrategyKey.PATTERN),
    (CodeKeywords, StrategyKey.GENERAL),
)


def classify_intent(query: str) -> StrategyKey:
    """
    Pick the graph strategy for a free-text query.

    Examples:
        >>> classify_intent("work experience with react")
        <StrategyKey.EMPLOYMENT: 'employment'>
        >>> classify_intent("")
        <StrategyKey.GENERAL: 'general'>
    """
    lower_query = (query or "").lower()

    for keywords, strategy_key in INTENT_PRIORITY:
        if any(keyword.value in lower_query for keyword in keywords):
            return strategy_key

    return StrategyKey.GENERAL
