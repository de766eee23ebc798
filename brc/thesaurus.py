"""Related-word table used to suggest alternative search terms.

Each word in a group points at the rest of its group. The table is
frozen at import; nothing adds to it at runtime.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

# Synonym groups (each term in a group maps to the other terms)
RELATED_GROUPS: List[List[str]] = [
    ["god", "lord", "almighty", "creator", "father"],
    ["jesus", "christ", "messiah", "saviour", "savior", "lamb"],
    ["spirit", "ghost", "breath", "wind"],
    ["love", "charity", "mercy", "kindness", "compassion"],
    ["faith", "belief", "trust", "believe"],
    ["hope", "expectation", "trust"],
    ["peace", "rest", "quiet"],
    ["joy", "gladness", "rejoice", "delight"],
    ["sin", "iniquity", "transgression", "trespass", "wickedness"],
    ["forgive", "forgiveness", "pardon", "remission"],
    ["grace", "favour", "favor"],
    ["salvation", "deliverance", "redemption", "saved"],
    ["heaven", "paradise", "kingdom"],
    ["pray", "prayer", "supplication", "petition"],
    ["worship", "praise", "glorify", "bless"],
    ["wisdom", "understanding", "knowledge", "prudence"],
    ["light", "lamp", "brightness"],
    ["darkness", "shadow", "night"],
    ["death", "grave", "perish", "die"],
    ["life", "living", "alive"],
    ["covenant", "promise", "testament"],
    ["righteous", "just", "upright", "holy"],
]


def _build_table(groups: List[List[str]]) -> Mapping[str, Tuple[str, ...]]:
    """Create a read-only lookup where each term points to its related terms."""
    table: Dict[str, List[str]] = {}
    for group in groups:
        deduped: List[str] = []
        for term in group:
            term = term.lower()
            if term not in deduped:
                deduped.append(term)
        for term in deduped:
            related = table.setdefault(term, [])
            for other in deduped:
                if other != term and other not in related:
                    related.append(other)
    return MappingProxyType({term: tuple(words) for term, words in table.items()})


RELATED_WORDS: Mapping[str, Tuple[str, ...]] = _build_table(RELATED_GROUPS)


def find_related_words(word: str) -> List[str]:
    """Related words for a search term; [] when the term is not in the table."""
    return list(RELATED_WORDS.get(word.strip().lower(), ()))
