"""
Portfolio Graph Schema
======================

Node labels and relationship types of the portfolio knowledge graph.

These are trusted structural constants: query templates splice them in at
load time. User-supplied values are always bound as parameters.
"""

from enum import Enum


class NodeLabel(str, Enum):
    """Node labels."""
    PROJECT = "Project"
    EMPLOYMENT = "Employment"
    ACHIEVEMENT = "Achievement"
    EDUCATION = "Education"
    INSTITUTION = "Institution"
    DEGREE = "Degree"
    SUBJECT = "Subject"
    TECHNOLOGY = "Technology"
    SKILL = "Skill"
    PATTERN = "Pattern"
    CODE_FILE = "CodeFile"
    CODE_CHUNK = "CodeChunk"

    def __str__(self) -> str:
        return self.value


class RelationshipType(str, Enum):
    """Relationship types (from -> to)."""
    USES = "USES"                          # Project -> Technology
    DEMONSTRATES = "DEMONSTRATES"          # Project|Achievement -> Skill
    IMPLEMENTS = "IMPLEMENTS"              # Project -> Pattern
    CONTAINS = "CONTAINS"                  # Project -> CodeFile
    HAS_CHUNK = "HAS_CHUNK"                # Project -> CodeChunk
    USED_TECHNOLOGY = "USED_TECHNOLOGY"    # Employment -> Technology
    ACHIEVED = "ACHIEVED"                  # Employment -> Achievement
    INCLUDES_PROJECT = "INCLUDES_PROJECT"  # Employment -> Project
    AT_INSTITUTION = "AT_INSTITUTION"      # Education -> Institution
    FOR_DEGREE = "FOR_DEGREE"              # Education -> Degree
    COVERED = "COVERED"                    # Education -> Subject

    def __str__(self) -> str:
        return self.value


# Vector indexes: (label, attribute)
PROJECT_VECTOR_INDEX = (NodeLabel.PROJECT.value, "embedding")
EMPLOYMENT_VECTOR_INDEX = (NodeLabel.EMPLOYMENT.value, "embedding")

# Full-text indexes: label
PROJECT_FULLTEXT_INDEX = NodeLabel.PROJECT.value
ACHIEVEMENT_FULLTEXT_INDEX = NodeLabel.ACHIEVEMENT.value
