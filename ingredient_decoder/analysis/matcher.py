from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from ingredient_decoder.analysis.synonyms import synonyms_for

logger = logging.getLogger(__name__)

# ----------------------------
# Enums
# ----------------------------

class FlagType(str, enum.Enum):
    allergen = "allergen"
    additive = "additive"
    dietary = "dietary"
    environmental = "environmental"
    custom = "custom"

    @classmethod
    def _missing_(cls, value):
        # Profile clients also send the short form "diet".
        if isinstance(value, str) and value.lower() == "diet":
            return cls.dietary
        return None


class VeganStatus(str, enum.Enum):
    vegan = "vegan"
    non_vegan = "nonVegan"
    maybe_vegan = "maybeVegan"
    unknown = "unknown"


class VegetarianStatus(str, enum.Enum):
    vegetarian = "vegetarian"
    non_vegetarian = "nonVegetarian"
    maybe_vegetarian = "maybeVegetarian"
    unknown = "unknown"


class SafetyStatus(str, enum.Enum):
    unknown = "unknown"
    good = "good"
    caution = "caution"
    warning = "warning"


MATCH_SUBSTRING = "substring"
MATCH_WORD = "word"
MATCH_MODES = (MATCH_SUBSTRING, MATCH_WORD)

# UTF-8 bullet that was decoded as cp1252 somewhere upstream (OCR, scraped labels).
_MISENCODED_BULLET = "â€¢"
_NON_NAME_CHARS = re.compile(r"[^\w\s-]", re.ASCII)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _flag_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"is_active must be a boolean, got {value!r}")

# ----------------------------
# Data
# ----------------------------

@dataclass(frozen=True)
class IngredientFlag:
    """A dietary restriction as stored on the user's profile."""

    id: str
    type: str
    value: str
    display_name: str
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IngredientFlag":
        return cls(
            id=str(data.get("id") or data["value"]),
            type=FlagType(data.get("type") or FlagType.custom).value,
            value=str(data["value"]),
            display_name=str(data.get("display_name") or data["value"]),
            is_active=_flag_bool(data.get("is_active", True)),
        )


@dataclass(frozen=True)
class ParsedIngredient:
    name: str
    normalized_name: str
    is_flagged: bool = False
    flag_reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "normalized_name": self.normalized_name,
            "is_flagged": self.is_flagged,
            "flag_reasons": list(self.flag_reasons),
        }


@dataclass(frozen=True)
class AnalysisResult:
    parsed_ingredients: tuple[ParsedIngredient, ...]
    overall_status: SafetyStatus
    flagged_count: int

    def to_dict(self) -> dict:
        return {
            "parsed_ingredients": [i.to_dict() for i in self.parsed_ingredients],
            "overall_status": self.overall_status.value,
            "flagged_count": self.flagged_count,
        }


@dataclass(frozen=True)
class AnalysisPolicy:
    """Product rules that are not part of the matching algorithm itself."""

    caution_max_flags: int = 2
    match_mode: str = MATCH_SUBSTRING

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AnalysisPolicy":
        mode = str(config.get("INGREDIENT_MATCH_MODE") or MATCH_SUBSTRING).lower()
        if mode not in MATCH_MODES:
            logger.warning("Unknown INGREDIENT_MATCH_MODE %r, using %r", mode, MATCH_SUBSTRING)
            mode = MATCH_SUBSTRING
        return cls(
            caution_max_flags=int(config.get("ANALYSIS_CAUTION_MAX_FLAGS", cls.caution_max_flags)),
            match_mode=mode,
        )


DEFAULT_POLICY = AnalysisPolicy()


@dataclass
class _Draft:
    name: str
    reasons: list[str] = field(default_factory=list)
    is_flagged: bool = False

    def add_reason(self, reason: str) -> bool:
        if reason in self.reasons:
            return False
        self.reasons.append(reason)
        return True

    def freeze(self) -> ParsedIngredient:
        return ParsedIngredient(
            name=self.name,
            normalized_name=normalize_ingredient_name(self.name),
            is_flagged=self.is_flagged,
            flag_reasons=tuple(self.reasons),
        )

# ----------------------------
# Tokenising
# ----------------------------

def parse_ingredient_string(ingredients: Optional[str]) -> list[str]:
    """Split a label's ingredient list on top-level commas.

    Commas inside parentheses do not split, so
    ``"Sugar, Natural Flavor (contains milk, soy)"`` gives two items.
    """
    if not ingredients:
        return []

    cleaned = (
        ingredients.replace("\n", ", ")
        .replace(_MISENCODED_BULLET, ",")
        .replace("*", "")
    )

    result: list[str] = []
    current: list[str] = []
    depth = 0
    for char in cleaned:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            item = "".join(current).strip()
            if item:
                result.append(item)
            current = []
            continue
        current.append(char)

    item = "".join(current).strip()
    if item:
        result.append(item)
    return result


def normalize_ingredient_name(name: str) -> str:
    return _NON_NAME_CHARS.sub("", name.strip().lower().replace("*", "")).strip()

# ----------------------------
# Matching
# ----------------------------

def _contains(haystack: str, needle: str, mode: str = MATCH_SUBSTRING) -> bool:
    """Case must already be folded by the caller."""
    if mode == MATCH_WORD:
        return re.search(r"(?<!\w)" + re.escape(needle) + r"(?!\w)", haystack) is not None
    return needle in haystack


def matches_flag(ingredient: str, flag: IngredientFlag, mode: str = MATCH_SUBSTRING) -> bool:
    """True if the ingredient mentions the flag value or one of its synonyms.

    Substring mode over-matches on purpose ("egg" hits "eggplant").
    """
    ingredient_lower = ingredient.lower()
    flag_value = flag.value.lower()

    if _contains(ingredient_lower, flag_value, mode):
        return True
    return any(_contains(ingredient_lower, synonym.lower(), mode) for synonym in synonyms_for(flag_value))


def _has_active_value(flags: Iterable[IngredientFlag], value: str) -> bool:
    return any(f.value.lower() == value for f in flags)


def _derive_status(ingredient_count: int, flagged_count: int, policy: AnalysisPolicy) -> SafetyStatus:
    if ingredient_count == 0:
        return SafetyStatus.unknown
    if flagged_count == 0:
        return SafetyStatus.good
    if flagged_count <= policy.caution_max_flags:
        return SafetyStatus.caution
    return SafetyStatus.warning


def analyze_product(
    ingredients_text: Optional[str],
    allergens: Sequence[str] = (),
    additives: Sequence[str] = (),
    vegan_status: str = VeganStatus.unknown,
    vegetarian_status: str = VegetarianStatus.unknown,
    user_flags: Sequence[IngredientFlag] = (),
    policy: AnalysisPolicy = DEFAULT_POLICY,
) -> AnalysisResult:
    """Check a product's ingredient text against the user's active flags.

    ``flagged_count`` goes up once per newly flagged ingredient in the
    ingredient pass, again in the allergen pass for ingredients that pass
    flags for the first time, and once each for an unmet vegan or vegetarian
    requirement. ``additives`` is accepted for interface compatibility and is
    not used.
    """
    active = [f for f in user_flags if f.is_active]
    mode = policy.match_mode
    flagged_count = 0

    drafts = [_Draft(name) for name in parse_ingredient_string(ingredients_text)]

    for draft in drafts:
        for flag in active:
            if matches_flag(draft.name, flag, mode):
                draft.add_reason(flag.display_name)
        if draft.reasons:
            draft.is_flagged = True
            flagged_count += 1

    allergen_flags = [f for f in active if f.type == FlagType.allergen]
    for allergen in allergens:
        allergen_lower = allergen.lower()
        for flag in allergen_flags:
            if not _contains(allergen_lower, flag.value.lower(), mode):
                continue
            for draft in drafts:
                if not _contains(draft.name.lower(), allergen_lower, mode):
                    continue
                if draft.add_reason(flag.display_name) and not draft.is_flagged:
                    draft.is_flagged = True
                    flagged_count += 1

    if _has_active_value(active, "vegan") and vegan_status in (VeganStatus.non_vegan, VeganStatus.maybe_vegan):
        flagged_count += 1
    if _has_active_value(active, "vegetarian") and vegetarian_status in (
        VegetarianStatus.non_vegetarian,
        VegetarianStatus.maybe_vegetarian,
    ):
        flagged_count += 1

    status = _derive_status(len(drafts), flagged_count, policy)
    logger.debug(
        "Analysed %d ingredients against %d active flags: %s (%d flagged)",
        len(drafts), len(active), status.value, flagged_count,
    )
    return AnalysisResult(
        parsed_ingredients=tuple(d.freeze() for d in drafts),
        overall_status=status,
        flagged_count=flagged_count,
    )

# ----------------------------
# Presentation lookups
# ----------------------------

_STATUS_COLORS = {
    SafetyStatus.good: "#34C759",
    SafetyStatus.caution: "#FFD60A",
    SafetyStatus.warning: "#FF3B30",
}
_STATUS_ICONS = {
    SafetyStatus.good: "CheckCircle",
    SafetyStatus.caution: "AlertTriangle",
    SafetyStatus.warning: "XCircle",
}
_STATUS_TITLES = {
    SafetyStatus.good: "Looks Good!",
    SafetyStatus.caution: "Some Concerns",
    SafetyStatus.warning: "Review Carefully",
}


def get_status_color(status: str) -> str:
    return _STATUS_COLORS.get(status, "#8E8E93")


def get_status_icon(status: str) -> str:
    """Icon identifier (lucide naming)."""
    return _STATUS_ICONS.get(status, "HelpCircle")


def get_status_title(status: str) -> str:
    return _STATUS_TITLES.get(status, "Limited Data")


def status_presentation(status: str) -> dict[str, str]:
    return {
        "status_color": get_status_color(status),
        "status_icon": get_status_icon(status),
        "status_title": get_status_title(status),
    }
