"""
Graph Search Strategies
=======================

Eight Cypher templates, one per search intent, each with a description used
in tool metadata.

Every template:
- binds the user query as ``$query`` (never interpolated)
- splices only trusted RelationshipType/NodeLabel constants at load time
- returns the full SearchResult column set

The registry is immutable and built once; pass it by reference.

Example:
    >>> registry = StrategyRegistry.default()
    >>> strategy = registry.get("technology")
    >>> rows = await session.execute(strategy.query, {"query": "react"})
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Union

from kgsearch.storage.graph.schema import (
    ACHIEVEMENT_FULLTEXT_INDEX,
    PROJECT_FULLTEXT_INDEX,
    NodeLabel as L,
    RelationshipType as R,
)


class StrategyKey(str, Enum):
    """Graph search strategies."""
    TECHNOLOGY = "technology"
    SKILL = "skill"
    PATTERN = "pattern"
    EMPLOYMENT = "employment"
    ACHIEVEMENT = "achievement"
    EDUCATION = "education"
    LEADERSHIP = "leadership"
    GENERAL = "general"


@dataclass(frozen=True)
class StrategyDefinition:
    """
    A named graph query template.

    Attributes:
        key: Strategy key
        description: Human text for tool metadata and intent hints
        query: Parameterized Cypher template
    """
    key: StrategyKey
    description: str
    query: str


# Columns shared by every project-shaped strategy
_PROJECT_COLUMNS = """
           p.id AS id,
           p.title AS title,
           p.description AS description,
           p.role AS role,
           p.impact AS impact,
           p.completedDate AS completedDate,
           p.complexity AS complexity,
           p.fileCount AS fileCount,
           p.liveUrl AS liveUrl,
           p.githubUrl AS githubUrl"""

_NO_EMPLOYMENT_COLUMNS = """
           null AS codeSnippets,
           null AS company,
           null AS position,
           null AS achievements"""


TECHNOLOGY_QUERY = f"""
      MATCH (t:{L.TECHNOLOGY.value})<-[:{R.USES.value}]-(p:{L.PROJECT.value})
      WHERE toLower(t.name) CONTAINS toLower($query)
      OPTIONAL MATCH (p)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})
      OPTIONAL MATCH (p)-[:{R.IMPLEMENTS.value}]->(pat:{L.PATTERN.value})
      OPTIONAL MATCH (p)-[:{R.USES.value}]->(tech:{L.TECHNOLOGY.value})

      WITH p, collect(DISTINCT s.name) AS skills,
           collect(DISTINCT pat.name) AS patterns,
           collect(DISTINCT tech.name) AS technologies

      RETURN 'project' AS resultType,{_PROJECT_COLUMNS},
           technologies,
           skills,
           patterns,{_NO_EMPLOYMENT_COLUMNS},
           1.0 AS score
      ORDER BY p.completedDate DESC
"""

SKILL_QUERY = f"""
      MATCH (s:{L.SKILL.value})<-[:{R.DEMONSTRATES.value}]-(p:{L.PROJECT.value})
      WHERE toLower(s.name) CONTAINS toLower($query)
      OPTIONAL MATCH (p)-[:{R.USES.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (p)-[:{R.IMPLEMENTS.value}]->(pat:{L.PATTERN.value})

      WITH p, collect(DISTINCT s.name) AS skills,
           collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT pat.name) AS patterns

      RETURN 'project' AS resultType,{_PROJECT_COLUMNS},
           technologies,
           skills,
           patterns,{_NO_EMPLOYMENT_COLUMNS},
           coalesce(p.complexity, 0) / 10.0 AS score
      ORDER BY p.completedDate DESC
"""

PATTERN_QUERY = f"""
      MATCH (pat:{L.PATTERN.value})<-[:{R.IMPLEMENTS.value}]-(p:{L.PROJECT.value})
      WHERE toLower(pat.name) CONTAINS toLower($query)
      OPTIONAL MATCH (p)-[:{R.USES.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (p)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})

      WITH p, collect(DISTINCT pat.name) AS patterns,
           collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT s.name) AS skills

      RETURN 'project' AS resultType,{_PROJECT_COLUMNS},
           technologies,
           skills,
           patterns,{_NO_EMPLOYMENT_COLUMNS},
           1.0 AS score
"""

EMPLOYMENT_QUERY = f"""
      MATCH (e:{L.EMPLOYMENT.value})
      OPTIONAL MATCH (e)-[:{R.USED_TECHNOLOGY.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (e)-[:{R.ACHIEVED.value}]->(a:{L.ACHIEVEMENT.value})
      OPTIONAL MATCH (e)-[:{R.INCLUDES_PROJECT.value}]->(p:{L.PROJECT.value})

      WITH e, collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT a.description) AS achievements,
           collect(DISTINCT p.title) AS relatedProjects

      RETURN 'employment' AS resultType,
           e.id AS id,
           e.position AS title,
           e.company + ' (' + toString(e.startDate) +
           CASE WHEN e.isCurrent THEN ' - Present)'
                ELSE ' - ' + toString(e.endDate) + ')' END AS description,
           'professional' AS role,
           CASE WHEN size(achievements) > 0 THEN achievements[0] ELSE null END AS impact,
           e.startDate AS completedDate,
           null AS complexity,
           size(relatedProjects) AS fileCount,
           null AS liveUrl,
           null AS githubUrl,
           technologies,
           [] AS skills,
           [] AS patterns,
           null AS codeSnippets,
           e.company AS company,
           e.position AS position,
           achievements[0..3] AS achievements,
           1.0 AS score
      ORDER BY e.startDate DESC
"""

ACHIEVEMENT_QUERY = f"""
      CALL db.idx.fulltext.queryNodes('{ACHIEVEMENT_FULLTEXT_INDEX}', $query)
      YIELD node AS a, score

      MATCH (a)<-[:{R.ACHIEVED.value}]-(e:{L.EMPLOYMENT.value})
      OPTIONAL MATCH (a)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})
      OPTIONAL MATCH (e)-[:{R.USED_TECHNOLOGY.value}]->(t:{L.TECHNOLOGY.value})

      WITH a, e, score,
           collect(DISTINCT s.name) AS skills,
           collect(DISTINCT t.name) AS technologies

      RETURN 'achievement' AS resultType,
           a.id AS id,
           'Achievement at ' + e.company AS title,
           a.description AS description,
           'achievement' AS role,
           a.description AS impact,
           e.startDate AS completedDate,
           CASE a.impact
             WHEN 'high' THEN 8
             WHEN 'medium' THEN 5
             WHEN 'low' THEN 3
             ELSE 1 END AS complexity,
           null AS fileCount,
           null AS liveUrl,
           null AS githubUrl,
           technologies,
           skills,
           [] AS patterns,
           null AS codeSnippets,
           e.company AS company,
           e.position AS position,
           [a.description] AS achievements,
           score
      ORDER BY score DESC
      LIMIT 20
"""

EDUCATION_QUERY = f"""
      MATCH (ed:{L.EDUCATION.value})
      OPTIONAL MATCH (ed)-[:{R.AT_INSTITUTION.value}]->(i:{L.INSTITUTION.value})
      OPTIONAL MATCH (ed)-[:{R.FOR_DEGREE.value}]->(d:{L.DEGREE.value})
      OPTIONAL MATCH (ed)-[:{R.COVERED.value}]->(s:{L.SUBJECT.value})

      WITH ed, i, d, collect(DISTINCT s.name) AS subjects

      RETURN 'education' AS resultType,
           ed.id AS id,
           d.name + ' at ' + i.name AS title,
           'Graduated ' + toString(ed.endDate) +
           CASE WHEN ed.grade IS NOT NULL THEN ' with ' + ed.grade ELSE '' END AS description,
           'education' AS role,
           null AS impact,
           ed.endDate AS completedDate,
           null AS complexity,
           size(subjects) AS fileCount,
           null AS liveUrl,
           null AS githubUrl,
           [] AS technologies,
           subjects AS skills,
           [] AS patterns,
           null AS codeSnippets,
           i.name AS company,
           d.name AS position,
           [] AS achievements,
           1.0 AS score
      ORDER BY ed.endDate DESC
"""

LEADERSHIP_QUERY = f"""
      MATCH (e:{L.EMPLOYMENT.value})-[:{R.ACHIEVED.value}]->(a:{L.ACHIEVEMENT.value})
      WHERE a.description CONTAINS 'lead' OR a.description CONTAINS 'team'
         OR a.description CONTAINS 'manage' OR a.description CONTAINS 'mentor'
         OR a.description CONTAINS 'Led' OR a.description CONTAINS 'Managed'

      OPTIONAL MATCH (e)-[:{R.USED_TECHNOLOGY.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (a)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})

      WITH e, collect(DISTINCT a.description) AS achievements,
           collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT s.name) AS skills
      WHERE size(achievements) > 0

      RETURN 'leadership' AS resultType,
           e.id AS id,
           'Leadership at ' + e.company AS title,
           e.position + ' - Leadership & Management Experience' AS description,
           'leadership' AS role,
           achievements[0] AS impact,
           e.startDate AS completedDate,
           size(achievements) AS complexity,
           null AS fileCount,
           null AS liveUrl,
           null AS githubUrl,
           technologies,
           skills + ['Leadership', 'Team Management'] AS skills,
           [] AS patterns,
           null AS codeSnippets,
           e.company AS company,
           e.position AS position,
           achievements[0..3] AS achievements,
           toFloat(size(achievements)) AS score
      ORDER BY score DESC
      LIMIT 20
"""

GENERAL_QUERY = f"""
      CALL db.idx.fulltext.queryNodes('{PROJECT_FULLTEXT_INDEX}', $query)
      YIELD node AS p, score

      OPTIONAL MATCH (p)-[:{R.USES.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (p)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})
      OPTIONAL MATCH (p)-[:{R.IMPLEMENTS.value}]->(pat:{L.PATTERN.value})

      WITH p, score, collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT s.name) AS skills,
           collect(DISTINCT pat.name) AS patterns

      RETURN 'project' AS resultType,{_PROJECT_COLUMNS},
           technologies,
           skills,
           patterns,{_NO_EMPLOYMENT_COLUMNS},
           score
      ORDER BY score DESC
      LIMIT 20
"""


_DEFINITIONS = (
    StrategyDefinition(
        StrategyKey.TECHNOLOGY,
        "Find projects using specific technologies (React, Python, AWS, etc.)",
        TECHNOLOGY_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.SKILL,
        "Find projects demonstrating specific skills",
        SKILL_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.PATTERN,
        "Find projects implementing design patterns (MVC, microservices, etc.)",
        PATTERN_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.EMPLOYMENT,
        "Work history, jobs, companies, positions held",
        EMPLOYMENT_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.ACHIEVEMENT,
        "Accomplishments, impact, what was delivered or improved",
        ACHIEVEMENT_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.EDUCATION,
        "Degrees, universities, institutions, subjects studied",
        EDUCATION_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.LEADERSHIP,
        "Team leadership, management experience, mentoring",
        LEADERSHIP_QUERY,
    ),
    StrategyDefinition(
        StrategyKey.GENERAL,
        "General project search by title, description, or content",
        GENERAL_QUERY,
    ),
)


class StrategyRegistry:
    """
    Read-only lookup of strategy definitions.

    Safe for unsynchronized concurrent reads.
    """

    def __init__(self, definitions: Mapping[StrategyKey, StrategyDefinition]):
        missing = set(StrategyKey) - set(definitions)
        if missing:
            raise ValueError(f"Missing strategies: {sorted(k.value for k in missing)}")
        self._definitions = MappingProxyType(dict(definitions))

    @classmethod
    def default(cls) -> "StrategyRegistry":
        """Registry with the built-in portfolio templates."""
        return cls({d.key: d for d in _DEFINITIONS})

    def get(self, key: Union[StrategyKey, str]) -> StrategyDefinition:
        """
        Get a strategy by key.

        Raises:
            ValueError: If key is not one of the StrategyKey values
        """
        try:
            strategy_key = StrategyKey(key)
        except ValueError:
            valid = ", ".join(k.value for k in StrategyKey)
            raise ValueError(f"Unknown strategy key: {key!r}. Valid keys: {valid}") from None
        return self._definitions[strategy_key]

    def describe(self) -> str:
        """One '- key: description' line per strategy."""
        return "\n".join(
            f"- {key.value}: {definition.description}"
            for key, definition in self._definitions.items()
        )

    @property
    def definitions(self) -> Mapping[StrategyKey, StrategyDefinition]:
        return self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[StrategyKey]:
        return iter(self._definitions)

    def __contains__(self, key: object) -> bool:
        try:
            return StrategyKey(key) in self._definitions
        except ValueError:
            return False


DEFAULT_REGISTRY = StrategyRegistry.default()
