"""
Vector Retriever
================

Similarity search over embedded Project and Employment nodes.

Flow:
    query text -> embedding provider -> query vector
                        |
        +---------------+---------------+
        v                               v
  [Project index]               [Employment index]
  k = max(top_k*10, 100)        k = max(top_k*10, 100)
  narrowing predicates          (no narrowing)
  LIMIT max(top_k*5, 50)        LIMIT max(top_k*5, 50)
        |                               |
        +---------------+---------------+
                        v
              SearchResult (semantic)

Candidate pools are oversampled to absorb filtering and reranking loss.
"""

import asyncio
import inspect
import structlog
from typing import Any, Callable, Dict, List, Optional, Tuple

from kgsearch.config import SearchTuning
from kgsearch.errors import ErrorReason, GraphSearchError, describe_error
from kgsearch.search.models import MatchType, SearchResult, VectorSearchOptions
from kgsearch.search.normalizer import normalize_record
from kgsearch.storage.graph.schema import (
    EMPLOYMENT_VECTOR_INDEX,
    PROJECT_VECTOR_INDEX,
    NodeLabel as L,
    RelationshipType as R,
)

log = structlog.get_logger()

EmbeddingsFactory = Callable[[str], Any]


def _default_embeddings_factory(model_name: str) -> Any:
    # sentence-transformers/torch are imported only when really embedding
    from kgsearch.storage.vectors.embeddings import get_embeddings
    return get_embeddings(model_name)


async def _invoke(fn: Callable, *args: Any) -> Any:
    """Await async providers; run sync ones in the default executor."""
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, fn, *args)
    if inspect.isawaitable(result):
        return await result
    return result


async def embed_query(
    embedding_model_name: str,
    query: str,
    embeddings_factory: Optional[EmbeddingsFactory] = None
) -> List[float]:
    """
    Embed the query text.

    Uses the provider's ``encode_query`` when available; a provider that only
    offers ``encode_batch`` gets a one-element batch and the first vector is
    returned.

    Args:
        embedding_model_name: Model used for the stored node embeddings
        query: Query text
        embeddings_factory: model name -> provider (default: get_embeddings)

    Returns:
        Query vector
    """
    factory = embeddings_factory or _default_embeddings_factory
    embeddings = factory(embedding_model_name)

    encode_query = getattr(embeddings, "encode_query", None)
    if callable(encode_query):
        return list(await _invoke(encode_query, query))

    log.debug(f"Provider for {embedding_model_name} has no encode_query, using encode_batch")
    vectors = await _invoke(embeddings.encode_batch, [query])
    return list(vectors[0])


def _project_query(options: VectorSearchOptions, tuning: SearchTuning) -> Tuple[str, Dict[str, Any]]:
    """Build the project similarity query and its narrowing parameters."""
    label, attribute = PROJECT_VECTOR_INDEX
    where_conditions: List[str] = []
    params: Dict[str, Any] = {}

    if options.min_complexity:
        where_conditions.append("p.complexity >= $minComplexity")
        params["minComplexity"] = options.min_complexity

    if options.date_range:
        where_conditions.append(
            "toString(p.completedDate) >= $startDate AND toString(p.completedDate) <= $endDate"
        )
        params["startDate"] = options.date_range.start
        params["endDate"] = options.date_range.end

    if options.technologies:
        where_conditions.append("any(tech IN $techFilter WHERE tech IN technologies)")
        params["techFilter"] = list(options.technologies)

    where_clause = f"WHERE {' AND '.join(where_conditions)}" if where_conditions else ""

    if options.include_code:
        code_clause = f"""
      OPTIONAL MATCH (p)-[:{R.HAS_CHUNK.value}]->(chunk:{L.CODE_CHUNK.value})
      WITH p, vecScore, technologies, skills, patterns, fileCount,
           [c IN collect(DISTINCT chunk) | {{
             type: c.type,
             content: c.content,
             metadata: c.metadata
           }}][0..{int(tuning.max_code_snippets)}] AS codeSnippets
"""
        code_column = "codeSnippets"
    else:
        code_clause = ""
        code_column = "null AS codeSnippets"

    query = f"""
      CALL db.idx.vector.queryNodes('{label}', '{attribute}', $k, vecf32($qvec))
      YIELD node AS p, score AS distance
      WITH p, 1.0 - distance AS vecScore

      OPTIONAL MATCH (p)-[:{R.USES.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (p)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})
      OPTIONAL MATCH (p)-[:{R.IMPLEMENTS.value}]->(pat:{L.PATTERN.value})
      OPTIONAL MATCH (p)-[:{R.CONTAINS.value}]->(f:{L.CODE_FILE.value})

      WITH p, vecScore,
           collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT s.name) AS skills,
           collect(DISTINCT pat.name) AS patterns,
           count(DISTINCT f) AS fileCount
      {where_clause}
      {code_clause}
      RETURN 'project' AS resultType,
           p.id AS id,
           p.title AS title,
           p.description AS description,
           p.role AS role,
           p.impact AS impact,
           p.completedDate AS completedDate,
           p.complexity AS complexity,
           coalesce(p.fileCount, fileCount) AS fileCount,
           p.liveUrl AS liveUrl,
           p.githubUrl AS githubUrl,
           technologies,
           skills,
           patterns,
           {code_column},
           null AS company,
           null AS position,
           null AS achievements,
           vecScore AS score
      ORDER BY vecScore DESC
      LIMIT $top
"""
    return query, params


def _employment_query() -> str:
    label, attribute = EMPLOYMENT_VECTOR_INDEX
    return f"""
      CALL db.idx.vector.queryNodes('{label}', '{attribute}', $k, vecf32($qvec))
      YIELD node AS e, score AS distance
      WITH e, 1.0 - distance AS empScore

      OPTIONAL MATCH (e)-[:{R.USED_TECHNOLOGY.value}]->(t:{L.TECHNOLOGY.value})
      OPTIONAL MATCH (e)-[:{R.ACHIEVED.value}]->(a:{L.ACHIEVEMENT.value})
      OPTIONAL MATCH (a)-[:{R.DEMONSTRATES.value}]->(s:{L.SKILL.value})
      OPTIONAL MATCH (e)-[:{R.INCLUDES_PROJECT.value}]->(p:{L.PROJECT.value})

      WITH e, empScore,
           collect(DISTINCT t.name) AS technologies,
           collect(DISTINCT s.name) AS skills,
           collect(DISTINCT a.description) AS achievements,
           collect(DISTINCT p.title) AS relatedProjects

      RETURN 'employment' AS resultType,
           e.id AS id,
           e.position AS title,
           e.company + ' - ' +
           CASE WHEN e.isCurrent THEN 'Current'
                ELSE toString(e.endDate) END AS description,
           'professional' AS role,
           CASE WHEN size(achievements) > 0 THEN achievements[0] ELSE null END AS impact,
           e.startDate AS completedDate,
           null AS complexity,
           size(relatedProjects) AS fileCount,
           null AS liveUrl,
           null AS githubUrl,
           technologies,
           skills,
           [] AS patterns,
           null AS codeSnippets,
           e.company AS company,
           e.position AS position,
           achievements[0..3] AS achievements,
           empScore AS score
      ORDER BY empScore DESC
      LIMIT $top
"""


def build_vector_queries(
    qvec: List[float],
    top_k: int,
    options: Optional[VectorSearchOptions] = None,
    tuning: Optional[SearchTuning] = None
) -> Tuple[str, str, Dict[str, Any]]:
    """
    Build the project and employment similarity queries.

    Returns:
        (project_query, employment_query, params). The employment query uses
        only ``qvec``, ``k`` and ``top``; narrowing parameters apply to
        projects.
    """
    options = options or VectorSearchOptions()
    tuning = tuning or SearchTuning()

    project_query, narrowing = _project_query(options, tuning)
    params: Dict[str, Any] = {
        "qvec": list(qvec),
        "k": tuning.candidate_pool(top_k),
        "top": tuning.result_limit(top_k),
        **narrowing,
    }
    return project_query, _employment_query(), params


async def perform_vector_search(
    session: Any,
    qvec: List[float],
    top_k: int,
    options: Optional[VectorSearchOptions] = None,
    tuning: Optional[SearchTuning] = None
) -> List[SearchResult]:
    """
    Run the similarity search on one session.

    Args:
        session: Graph session (``execute(query, params)``)
        qvec: Query vector
        top_k: Requested number of final results
        options: Narrowing predicates and code-snippet flag
        tuning: Oversampling parameters

    Returns:
        Project results followed by employment results, tagged semantic

    Raises:
        GraphSearchError: reason VECTOR_SEARCH on any backend failure
    """
    project_query, employment_query, params = build_vector_queries(qvec, top_k, options, tuning)
    employment_params = {key: params[key] for key in ("qvec", "k", "top")}

    log.debug(
        f"vector_search - top_k={top_k}, k={params['k']}, top={params['top']}, "
        f"filters={sorted(set(params) - set(employment_params))}"
    )

    try:
        project_rows = await session.execute(project_query, params)
        employment_rows = await session.execute(employment_query, employment_params)
    except Exception as e:
        log.error(f"Vector search failed: {describe_error(e)}")
        raise GraphSearchError(
            f"Vector search failed: {describe_error(e)}",
            ErrorReason.VECTOR_SEARCH,
        ) from e

    results = [
        normalize_record(row, MatchType.SEMANTIC)
        for row in [*project_rows, *employment_rows]
    ]
    log.debug(
        f"vector_search returned {len(results)} candidates "
        f"({len(project_rows)} projects, {len(employment_rows)} employments)"
    )
    return results
