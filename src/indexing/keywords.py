"""Domain keyword extraction for rulebook chunks."""

from collections.abc import Iterable

# Wargaming rulebook vocabulary, grouped by topic. Matching is a plain
# case-insensitive substring test, so "roll" also matches "rolled".
DOMAIN_VOCABULARY: dict[str, tuple[str, ...]] = {
    "damage": ("injury", "wound", "damage", "attack", "defense", "armour", "armor"),
    "abilities": ("skill", "ability", "trait", "equipment", "weapon", "item"),
    "campaign": ("exploration", "loot", "treasure", "encounter", "event"),
    "advancement": ("advancement", "experience", "level", "upgrade"),
    "forces": ("warband", "unit", "model", "hero", "henchman"),
    "scenarios": ("deployment", "scenario", "mission", "objective"),
    "combat": ("movement", "shooting", "combat", "melee", "ranged"),
    "morale": ("morale", "rout", "flee", "recovery"),
    "dice": ("d6", "d66", "d3", "d10", "d20", "dice", "roll"),
    "layout": ("table", "chart", "list"),
}


def flatten_vocabulary(groups: dict[str, tuple[str, ...]]) -> tuple[str, ...]:
    """Flatten grouped terms into one ordered, duplicate-free tuple."""
    seen: dict[str, None] = {}
    for terms in groups.values():
        for term in terms:
            seen.setdefault(term.lower(), None)
    return tuple(seen)


class KeywordExtractor:
    """Finds which vocabulary terms occur in a span of text.

    Args:
        vocabulary: Terms to look for. Defaults to DOMAIN_VOCABULARY.
    """

    def __init__(self, vocabulary: Iterable[str] | None = None) -> None:
        if vocabulary is None:
            self._terms = flatten_vocabulary(DOMAIN_VOCABULARY)
        else:
            self._terms = tuple(dict.fromkeys(term.lower() for term in vocabulary))

    @property
    def terms(self) -> tuple[str, ...]:
        return self._terms

    def extract(self, text: str) -> list[str]:
        """Return each vocabulary term found in ``text``, once, in vocabulary order."""
        lowered = text.lower()
        return [term for term in self._terms if term in lowered]
