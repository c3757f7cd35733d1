"""
Source collection from grounding metadata.

Turns the grounding chunks attached to a generation response into the
list of web sources shown next to the schedule.
"""

from typing import Any, Iterable, List, Optional

from route_planner.shared.contracts.route_output import SourceRecord


def _field(obj: Any, name: str) -> Any:
    # Chunks arrive as plain dicts from the client, or as SDK objects
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def collect_sources(grounding_chunks: Optional[Iterable[Any]]) -> List[SourceRecord]:
    """
    Collect web sources from grounding chunks.

    Chunks without a web entry, and web entries missing a uri or title,
    are dropped. Order is preserved and duplicate URIs are kept.

    Args:
        grounding_chunks: Chunks shaped {web?: {uri?, title?}}, or None

    Returns:
        List of SourceRecord, empty when there is no grounding metadata
    """
    if not grounding_chunks:
        return []

    sources = []
    for chunk in grounding_chunks:
        web = _field(chunk, "web")
        uri = _field(web, "uri")
        title = _field(web, "title")
        if uri and title:
            sources.append(SourceRecord(uri=uri, title=title))
    return sources
