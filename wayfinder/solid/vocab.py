"""
Identity vocabularies and profile extraction for pod documents.

Profiles are read with FOAF and vCard predicates:

- name:   foaf:name, vcard:fn
- role:   vcard:role, vcard:title
- email:  vcard:hasEmail, foaf:mbox (``mailto:`` IRIs, or a node with vcard:value)
- skills: vcard:note, comma separated
- photo:  foaf:img, vcard:hasPhoto

Extraction is per field: a value of the wrong shape makes that field absent and
leaves the others alone.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from rdflib import BNode, Graph, Literal, Namespace, URIRef
from rdflib.term import Node

from wayfinder.models.person import RemoteProfileFragment

logger = logging.getLogger(__name__)

FOAF = Namespace("http://xmlns.com/foaf/0.1/")
VCARD = Namespace("http://www.w3.org/2006/vcard/ns#")

# Namespace subclasses str, so terms are looked up by key to avoid str methods such as .title
NAME_PREDICATES = (FOAF["name"], VCARD["fn"])
ROLE_PREDICATES = (VCARD["role"], VCARD["title"])
EMAIL_PREDICATES = (VCARD["hasEmail"], FOAF["mbox"])
SKILLS_PREDICATES = (VCARD["note"],)
PHOTO_PREDICATES = (FOAF["img"], VCARD["hasPhoto"])

_FORMATS = {
    "text/turtle": "turtle",
    "application/x-turtle": "turtle",
    "application/ld+json": "json-ld",
    "application/json": "json-ld",
    "application/n-triples": "nt",
    "application/rdf+xml": "xml",
}


class ProfileDocumentError(Exception):
    """Raised when a profile document cannot be parsed as RDF."""


def rdf_format_for(content_type: Optional[str]) -> str:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return _FORMATS.get(media_type, "turtle")


def parse_profile_document(body: str, *, content_type: Optional[str], document_url: str) -> Graph:
    graph = Graph()
    try:
        graph.parse(data=body, format=rdf_format_for(content_type), publicID=document_url)
    except Exception as exc:  # rdflib parsers raise parser-specific error types
        raise ProfileDocumentError(f"Unparseable profile document at {document_url}: {exc}") from exc
    return graph


def profile_subject(graph: Graph, web_id: str) -> Optional[Node]:
    """Locate the node describing the WebID owner within the document."""

    subject = URIRef(web_id)
    if (subject, None, None) in graph:
        return subject

    document = URIRef(web_id.split("#", 1)[0])
    topic = graph.value(document, FOAF["primaryTopic"])
    if topic is not None and (topic, None, None) in graph:
        return topic
    return None


def extract_profile(graph: Graph, web_id: str) -> Optional[RemoteProfileFragment]:
    """Read known vocabulary fields for ``web_id``; ``None`` when the document does not describe it."""

    subject = profile_subject(graph, web_id)
    if subject is None:
        return None

    return RemoteProfileFragment(
        name=_first(graph, subject, NAME_PREDICATES, _as_text),
        role=_first(graph, subject, ROLE_PREDICATES, _as_text),
        email=_first(graph, subject, EMAIL_PREDICATES, lambda node: _as_email(graph, node)),
        skills=_first(graph, subject, SKILLS_PREDICATES, _as_skills),
        photo=_first(graph, subject, PHOTO_PREDICATES, _as_iri),
    )


def _first(graph: Graph, subject: Node, predicates: Iterable[URIRef], convert: Callable[[Node], object]):
    for predicate in predicates:
        for node in graph.objects(subject, predicate):
            value = convert(node)
            if value:
                return value
    return None


def _as_text(node: Node) -> Optional[str]:
    if not isinstance(node, Literal):
        return None
    text = str(node).strip()
    return text or None


def _as_iri(node: Node) -> Optional[str]:
    if not isinstance(node, URIRef):
        return None
    return str(node)


def _as_email(graph: Graph, node: Node) -> Optional[str]:
    if isinstance(node, BNode):
        inner = graph.value(node, VCARD["value"])
        return _as_email(graph, inner) if inner is not None and not isinstance(inner, BNode) else None
    if isinstance(node, URIRef):
        text = str(node)
        if not text.startswith("mailto:"):
            return None
        address = text[len("mailto:"):].strip()
        return address if "@" in address else None
    return None


def _as_skills(node: Node) -> Optional[List[str]]:
    text = _as_text(node)
    if text is None:
        return None
    skills = [item.strip() for item in text.split(",") if item.strip()]
    return skills or None
