# ABOUTME: Tiered matching of two book collections (e.g. two scanned directories).
# ABOUTME: Classifies every record into exact, title, author, similar-title, or one-side-only buckets.

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from booksteward.core.errors import require
from booksteward.metadata.scoring import similarity
from booksteward.metadata.types import BookRecord, is_blank

# Titles must score strictly above this to count as similar.
SIMILARITY_THRESHOLD = 0.7


class MatchKind(Enum):
    """Match buckets, in the order the tiers run."""

    EXACT = "exact"
    TITLE_ONLY = "title_only"
    AUTHOR_ONLY = "author_only"
    SIMILAR_TITLE = "similar_title"
    LEFT_ONLY = "left_only"
    RIGHT_ONLY = "right_only"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    MatchKind.EXACT: "Exact match",
    MatchKind.TITLE_ONLY: "Same title",
    MatchKind.AUTHOR_ONLY: "Same author",
    MatchKind.SIMILAR_TITLE: "Similar title",
    MatchKind.LEFT_ONLY: "Left only",
    MatchKind.RIGHT_ONLY: "Right only",
}


@dataclass
class MatchPair:
    """One bucket entry. One side is None in the left-only and right-only buckets."""

    left: BookRecord | None
    right: BookRecord | None


@dataclass
class MatchBucket:
    """An ordered group of pairs classified under one MatchKind."""

    kind: MatchKind
    pairs: list[MatchPair] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.pairs)


@dataclass
class ReconciliationSession:
    """Per-comparison state: which records earlier tiers have already claimed.

    Records are tracked by their index in the input sequences, so equal
    records on the same side are still counted separately.
    """

    left: Sequence[BookRecord]
    right: Sequence[BookRecord]
    consumed_left: set[int] = field(default_factory=set)
    consumed_right: set[int] = field(default_factory=set)

    def remaining_left(self) -> list[int]:
        return [i for i in range(len(self.left)) if i not in self.consumed_left]

    def remaining_right(self) -> list[int]:
        return [j for j in range(len(self.right)) if j not in self.consumed_right]

    def consume(self, i: int, j: int) -> None:
        self.consumed_left.add(i)
        self.consumed_right.add(j)


@dataclass
class ComparisonResult:
    """All six buckets from one comparison, plus per-bucket counts."""

    exact: MatchBucket
    title_only: MatchBucket
    author_only: MatchBucket
    similar: MatchBucket
    left_only: MatchBucket
    right_only: MatchBucket
    left_total: int = 0
    right_total: int = 0

    @property
    def buckets(self) -> list[MatchBucket]:
        """Buckets in tier order."""
        return [
            self.exact,
            self.title_only,
            self.author_only,
            self.similar,
            self.left_only,
            self.right_only,
        ]

    @property
    def exact_count(self) -> int:
        return self.exact.count

    @property
    def title_only_count(self) -> int:
        return self.title_only.count

    @property
    def author_only_count(self) -> int:
        return self.author_only.count

    @property
    def similar_count(self) -> int:
        return self.similar.count

    @property
    def counts(self) -> dict[str, int]:
        return {bucket.kind.value: bucket.count for bucket in self.buckets}


PairPredicate = Callable[[BookRecord, BookRecord], bool]


def _key(value: str | None) -> str:
    """Trimmed, case-folded comparison key. Missing values compare as ""."""
    return (value or "").strip().casefold()


def _same_title_and_author(left: BookRecord, right: BookRecord) -> bool:
    return _key(left.title) == _key(right.title) and _key(left.author) == _key(right.author)


def _same_title(left: BookRecord, right: BookRecord) -> bool:
    return _key(left.title) == _key(right.title)


def _same_author(left: BookRecord, right: BookRecord) -> bool:
    if is_blank(left.author) or is_blank(right.author):
        return False
    return _key(left.author) == _key(right.author)


def _similar_title(threshold: float) -> PairPredicate:
    def predicate(left: BookRecord, right: BookRecord) -> bool:
        if is_blank(left.title) or is_blank(right.title):
            return False
        return similarity(left.title, right.title) > threshold

    return predicate


def _run_tier(
    session: ReconciliationSession, kind: MatchKind, predicate: PairPredicate,
) -> MatchBucket:
    """Greedy pass over unclaimed records, left-major then right-minor.

    The first unclaimed right record satisfying the predicate wins for each
    left record, and both are claimed before the scan moves on. This is not
    an optimal assignment: ties go to whichever right record comes first.
    """
    bucket = MatchBucket(kind)
    for i in session.remaining_left():
        left = session.left[i]
        for j in session.remaining_right():
            right = session.right[j]
            if predicate(left, right):
                bucket.pairs.append(MatchPair(left, right))
                session.consume(i, j)
                break
    return bucket


def _sort_key(record: BookRecord) -> str:
    return record.title or ""


def compare_collections(
    left: Sequence[BookRecord],
    right: Sequence[BookRecord],
    *,
    threshold: float = SIMILARITY_THRESHOLD,
) -> ComparisonResult:
    """Classify two record collections into six match buckets.

    Tiers run in a fixed order, each only seeing records that earlier tiers
    left unclaimed:

    1. exact: title and author equal (trimmed, ignoring case)
    2. title_only: title equal
    3. author_only: author equal, both non-blank
    4. similar: title similarity strictly above threshold
    5. left_only / right_only: whatever is left, sorted by title

    Every input record ends up in exactly one bucket.

    Raises:
        ValidationError: If either collection is None.
    """
    require(left, "left")
    require(right, "right")

    session = ReconciliationSession(left=left, right=right)

    exact = _run_tier(session, MatchKind.EXACT, _same_title_and_author)
    title_only = _run_tier(session, MatchKind.TITLE_ONLY, _same_title)
    author_only = _run_tier(session, MatchKind.AUTHOR_ONLY, _same_author)
    similar = _run_tier(session, MatchKind.SIMILAR_TITLE, _similar_title(threshold))

    left_only = MatchBucket(
        MatchKind.LEFT_ONLY,
        [
            MatchPair(record, None)
            for record in sorted(
                (left[i] for i in session.remaining_left()), key=_sort_key,
            )
        ],
    )
    right_only = MatchBucket(
        MatchKind.RIGHT_ONLY,
        [
            MatchPair(None, record)
            for record in sorted(
                (right[j] for j in session.remaining_right()), key=_sort_key,
            )
        ],
    )

    return ComparisonResult(
        exact=exact,
        title_only=title_only,
        author_only=author_only,
        similar=similar,
        left_only=left_only,
        right_only=right_only,
        left_total=len(left),
        right_total=len(right),
    )
