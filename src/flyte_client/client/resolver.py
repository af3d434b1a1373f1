"""Resolution of link relations to URLs."""

from ..models.links import LinkDocument
from .errors import ResolutionError


def resolve_link(document: LinkDocument, rel: str) -> str:
    """Return the href of the first link in ``document`` matching ``rel``.

    A link matches when its relation equals ``rel``, or when its namespaced
    relation (``http://host/swagger#!/info/health``) has ``rel`` as its
    short name (``info/health``).

    Args:
        document: Link document to search
        rel: Relation to look up

    Returns:
        str: The href of the matching link

    Raises:
        ResolutionError: If no link in the document matches
    """
    for link in document.links:
        if link.matches(rel):
            return link.href

    raise ResolutionError(rel, document.relations)
