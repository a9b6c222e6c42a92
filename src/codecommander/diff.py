"""Line-oriented unified diff engine.

Two line sequences are aligned with a longest-common-subsequence table, the
alignment is replayed into EQUAL/DELETE/INSERT records, and those records are
regrouped into hunks that carry a bounded amount of surrounding context.

Everything in this module is pure computation over in-memory lists. Reading
files, guarding input size and wording the report for users live in
`codecommander.files` and `codecommander.reports`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

DEFAULT_CONTEXT = 3


class Op(Enum):
    """Edit operation for one aligned line; the value is its patch prefix."""

    EQUAL = " "
    DELETE = "-"
    INSERT = "+"


@dataclass(frozen=True, slots=True)
class Change:
    """One aligned line.

    `index_a` / `index_b` are 0-based positions in the respective inputs and
    are None on the side the line does not exist (INSERT has no `index_a`,
    DELETE has no `index_b`).
    """

    op: Op
    text: str
    index_a: int | None = None
    index_b: int | None = None


@dataclass(slots=True)
class Hunk:
    start_a: int
    count_a: int
    start_b: int
    count_b: int
    lines: list[Change] = field(default_factory=list)

    def header(self) -> str:
        old = _format_range(self.start_a, self.count_a)
        new = _format_range(self.start_b, self.count_b)
        return f"@@ -{old} +{new} @@"


@dataclass(frozen=True, slots=True)
class DiffResult:
    changes: list[Change]
    hunks: list[Hunk]

    @property
    def identical(self) -> bool:
        return not self.hunks

    @property
    def added(self) -> int:
        return sum(1 for c in self.changes if c.op is Op.INSERT)

    @property
    def removed(self) -> int:
        return sum(1 for c in self.changes if c.op is Op.DELETE)

    def render(self, label_a: str = "a", label_b: str = "b") -> str:
        return render_unified(self.hunks, label_a, label_b)


def _format_range(start: int, count: int) -> str:
    # An empty range names the line before it, which is its 0-based start.
    first = start + 1 if count else start
    return f"{first},{count}"


def build_lcs_table(a: Sequence[str], b: Sequence[str]) -> list[list[int]]:
    """Return the `(len(a)+1) x (len(b)+1)` LCS length table.

    `table[i][j]` is the LCS length of `a[:i]` and `b[:j]`. Lines compare with
    exact string equality; whitespace is significant.
    """

    n, m = len(a), len(b)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        row = table[i]
        prev = table[i - 1]
        line_a = a[i - 1]
        for j in range(1, m + 1):
            if line_a == b[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return table


def backtrack(table: Sequence[Sequence[int]], a: Sequence[str], b: Sequence[str]) -> list[Change]:
    """Walk `table` from `(len(a), len(b))` back to the origin.

    Matching lines are always taken first. On a tie between dropping a line
    from `b` or from `a`, the walk emits the INSERT, so in forward order a
    changed region lists its deletions before its insertions.
    """

    i, j = len(a), len(b)
    out: list[Change] = []
    while i > 0 or j > 0:
        if i > 0 and j > 0 and a[i - 1] == b[j - 1]:
            out.append(Change(Op.EQUAL, a[i - 1], index_a=i - 1, index_b=j - 1))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            out.append(Change(Op.INSERT, b[j - 1], index_b=j - 1))
            j -= 1
        else:
            out.append(Change(Op.DELETE, a[i - 1], index_a=i - 1))
            i -= 1
    out.reverse()
    return out


def align(lines_a: Sequence[str], lines_b: Sequence[str]) -> list[Change]:
    """Return the minimal alignment of `lines_a` against `lines_b`.

    The backtracker consumes a shared suffix as EQUAL records before anything
    else, so that suffix is split off up front and the table only covers the
    remaining heads. A shared prefix cannot be split off the same way: the
    tie-break may pair prefix lines differently.
    """

    a = list(lines_a)
    b = list(lines_b)
    n, m = len(a), len(b)

    tail = 0
    while tail < n and tail < m and a[n - 1 - tail] == b[m - 1 - tail]:
        tail += 1

    head_a = a[: n - tail]
    head_b = b[: m - tail]
    changes = backtrack(build_lcs_table(head_a, head_b), head_a, head_b)
    changes.extend(
        Change(Op.EQUAL, a[i], index_a=i, index_b=i + m - n) for i in range(n - tail, n)
    )
    return changes


def group_hunks(changes: Sequence[Change], context: int = DEFAULT_CONTEXT) -> list[Hunk]:
    """Group aligned records into hunks with up to `context` lines on each side.

    Change clusters separated by at most `2 * context` unchanged lines share a
    hunk, since their context windows would touch or overlap.
    """

    if context < 0:
        raise ValueError(f"context must be >= 0 (got {context})")

    edits = [k for k, c in enumerate(changes) if c.op is not Op.EQUAL]
    if not edits:
        return []

    # Lines of A and B consumed before each record.
    pos_a: list[int] = []
    pos_b: list[int] = []
    seen_a = seen_b = 0
    for c in changes:
        pos_a.append(seen_a)
        pos_b.append(seen_b)
        if c.op is not Op.INSERT:
            seen_a += 1
        if c.op is not Op.DELETE:
            seen_b += 1

    clusters: list[tuple[int, int]] = []
    first = last = edits[0]
    for k in edits[1:]:
        if k - last - 1 > 2 * context:
            clusters.append((first, last))
            first = k
        last = k
    clusters.append((first, last))

    hunks: list[Hunk] = []
    for first, last in clusters:
        lo = max(0, first - context)
        hi = min(len(changes), last + context + 1)
        lines = list(changes[lo:hi])
        hunks.append(
            Hunk(
                start_a=pos_a[lo],
                count_a=sum(1 for c in lines if c.op is not Op.INSERT),
                start_b=pos_b[lo],
                count_b=sum(1 for c in lines if c.op is not Op.DELETE),
                lines=lines,
            )
        )
    return hunks


def render_unified(hunks: Sequence[Hunk], label_a: str = "a", label_b: str = "b") -> str:
    """Render hunks as a unified diff; no hunks renders as an empty string."""

    if not hunks:
        return ""
    out = [f"--- {label_a}", f"+++ {label_b}"]
    for hunk in hunks:
        out.append(hunk.header())
        out.extend(c.op.value + c.text for c in hunk.lines)
    return "\n".join(out) + "\n"


def compute_diff(
    lines_a: Sequence[str],
    lines_b: Sequence[str],
    *,
    context: int = DEFAULT_CONTEXT,
) -> DiffResult:
    changes = align(lines_a, lines_b)
    return DiffResult(changes=changes, hunks=group_hunks(changes, context))


def unified_diff(
    lines_a: Sequence[str],
    lines_b: Sequence[str],
    *,
    context: int = DEFAULT_CONTEXT,
    label_a: str = "a",
    label_b: str = "b",
) -> str:
    """Return the unified diff of two line sequences, or "" when they match."""

    return compute_diff(lines_a, lines_b, context=context).render(label_a, label_b)
