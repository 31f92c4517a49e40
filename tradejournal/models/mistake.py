"""Mistake taxonomy used to classify rule-violation annotations."""

from pydantic import BaseModel, Field


class MistakeCategory(BaseModel):
    """A behavioral mistake category and the phrases that identify it."""

    id: str = Field(..., description="Stable category identifier")
    label: str = Field(..., description="Display label")
    keywords: tuple[str, ...] = Field(default=(), description="Lowercase phrases, matched as substrings")

    model_config = {"frozen": True}

    def matches(self, normalized: str) -> bool:
        """Check whether normalized (lowercased, trimmed) text contains a keyword."""
        return any(keyword in normalized for keyword in self.keywords)


OTHER_CATEGORY_ID = "other"

# Declared order is match priority.
MISTAKE_CATEGORIES: tuple[MistakeCategory, ...] = (
    MistakeCategory(
        id="early_exit",
        label="Exited Too Early",
        keywords=("early exit", "exit early", "got out early", "exited too early"),
    ),
    MistakeCategory(
        id="late_exit",
        label="Exited Too Late",
        keywords=("late exit", "held too long", "didnt exit", "exited too late"),
    ),
    MistakeCategory(
        id="no_setup",
        label="No Valid Setup",
        keywords=("no setup", "not setup", "no pattern", "invalid setup"),
    ),
    MistakeCategory(
        id="oversize",
        label="Oversized Position",
        keywords=("oversize", "too big", "too much size", "position too large"),
    ),
    MistakeCategory(
        id="fomo",
        label="FOMO Entry",
        keywords=("fomo", "chased", "chasing", "fear of missing"),
    ),
    MistakeCategory(
        id="revenge",
        label="Revenge Trade",
        keywords=("revenge", "tilted", "tilt", "angry trade"),
    ),
    MistakeCategory(
        id="no_stop",
        label="No Stop Loss",
        keywords=("no stop", "no stoploss", "didnt use stop", "without stop"),
    ),
    MistakeCategory(
        id="moved_stop",
        label="Moved Stop Loss",
        keywords=("moved stop", "adjusted stop", "widened stop", "changed stop"),
    ),
    MistakeCategory(
        id="wrong_direction",
        label="Wrong Direction",
        keywords=("wrong direction", "wrong side", "should have been"),
    ),
    MistakeCategory(
        id="poor_timing",
        label="Poor Entry Timing",
        keywords=("poor timing", "bad entry", "entered too early", "entered too late", "bad timing"),
    ),
    MistakeCategory(
        id="ignored_rules",
        label="Ignored Trading Rules",
        keywords=("ignored rule", "broke rule", "violated rule", "broke my rule"),
    ),
    MistakeCategory(
        id=OTHER_CATEGORY_ID,
        label="Other",
    ),
)
