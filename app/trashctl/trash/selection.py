"""Interactive ELN selection of trashed items.

A session lists the trash with 1-based ELNs, reads one line of input and
applies the selected operation. Input is either ``q`` (quit), ``*`` (all
items) or whitespace-separated ELNs and ``a-b`` ranges. Any other token
rejects the whole line. Out-of-range ELNs are reported one by one while
the remaining ELNs are still processed.

Restore sessions repeat until the trash is empty or the user quits;
erase sessions run a single cycle.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from trashctl.trash.engine import TrashEngine
from trashctl.trash.errors import InvalidSelectionError
from trashctl.trash.models import TrashActionResult

logger = logging.getLogger(__name__)

_ELN = re.compile(r"^\d+$")
_RANGE = re.compile(r"^(\d+)-(\d+)$")

QUIT_TOKEN = "q"
ALL_TOKEN = "*"


class SelectionMode(Enum):
    """Operation applied to selected items.

    Attributes:
        RESTORE: Move items back to their original location (loops).
        ERASE: Delete items permanently (single cycle).
    """

    RESTORE = "restore"
    ERASE = "erase"


class SelectionKind(Enum):
    """What a line of input selected."""

    QUIT = "quit"
    ALL = "all"
    INDICES = "indices"


@dataclass(frozen=True, slots=True)
class Selection:
    """Parsed line of selection input.

    Attributes:
        kind: Quit, everything, or explicit ELNs.
        indices: ELNs in input order without duplicates (INDICES only).
            Range checking happens when the selection is applied.
    """

    kind: SelectionKind
    indices: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check if nothing was entered."""
        return self.kind == SelectionKind.INDICES and not self.indices


def parse_selection(line: str) -> Selection:
    """Parse one line of selection input.

    Every token is checked before anything is decided, so a single bad
    token rejects the line even after a ``q`` or ``*``. Otherwise the first
    ``q`` or ``*`` decides the outcome.

    Args:
        line: Raw input line.

    Returns:
        The parsed Selection.

    Raises:
        InvalidSelectionError: A token is neither ``q``, ``*``, an ELN nor a
            well-formed ``a-b`` range.
    """
    indices: list[int] = []
    decided: SelectionKind | None = None
    for token in line.split():
        if token in (QUIT_TOKEN, ALL_TOKEN):
            if decided is None:
                decided = SelectionKind.QUIT if token == QUIT_TOKEN else SelectionKind.ALL
            continue
        if _ELN.match(token):
            indices.append(int(token))
            continue
        match = _RANGE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start <= end:
                indices.extend(range(start, end + 1))
                continue
        raise InvalidSelectionError(f"{token}: Invalid ELN", token)

    if decided is not None:
        return Selection(decided)
    return Selection(SelectionKind.INDICES, tuple(dict.fromkeys(indices)))


@dataclass(frozen=True, slots=True)
class BatchOutcome:
    """Result of applying one line of input.

    Attributes:
        results: Per-item results for the selected items.
        invalid_indices: ELNs outside the listing.
        invalid_token: Token that rejected the whole line, if any.
        remaining: Trashed item count after the batch.
    """

    results: tuple[TrashActionResult, ...] = ()
    invalid_indices: tuple[int, ...] = ()
    invalid_token: str | None = None
    remaining: int = 0

    @property
    def succeeded(self) -> int:
        """Number of items actually mutated."""
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> bool:
        """Check if anything in this batch went wrong."""
        return (
            self.invalid_token is not None
            or bool(self.invalid_indices)
            or any(not result.success for result in self.results)
        )


@dataclass(slots=True)
class SessionReport:
    """Summary of a whole selection session.

    Attributes:
        batches: Outcome of every applied line of input.
        empty: The trash was empty when the session started.
        quit: The session ended because the user quit (or input ended).
    """

    batches: list[BatchOutcome] = field(default_factory=list)
    empty: bool = False
    quit: bool = False

    @property
    def processed(self) -> int:
        """Total number of items mutated."""
        return sum(batch.succeeded for batch in self.batches)

    @property
    def failed(self) -> bool:
        """Check if any batch went wrong."""
        return any(batch.failed for batch in self.batches)


# Reader returns one line of input, or None at end of input
LineReader = Callable[[], str | None]
ListingRenderer = Callable[[list[str]], None]
BatchReporter = Callable[[BatchOutcome], None]


class SelectionSession:
    """Runs the List, Prompt, Apply, Report cycle over one trash area.

    Attributes:
        engine: Engine performing the operations.
        mode: Restore or erase.
    """

    def __init__(
        self,
        engine: TrashEngine,
        mode: SelectionMode,
        reader: LineReader,
        renderer: ListingRenderer,
        reporter: BatchReporter | None = None,
    ) -> None:
        """Initialize the SelectionSession.

        Args:
            engine: Engine performing the operations.
            mode: Restore (loops until empty) or erase (one cycle).
            reader: Reads one line of input; None means end of input.
            renderer: Displays the numbered listing.
            reporter: Called after every applied batch.
        """
        self.engine = engine
        self.mode = mode
        self._reader = reader
        self._renderer = renderer
        self._reporter = reporter

    def _apply(self, names: list[str]) -> list[TrashActionResult]:
        if self.mode == SelectionMode.RESTORE:
            return self.engine.restore_many(names)
        return self.engine.erase_many(names)

    def _read_selection(self) -> Selection | InvalidSelectionError | None:
        """Read lines until something is entered. None at end of input."""
        while True:
            line = self._reader()
            if line is None:
                return None
            try:
                selection = parse_selection(line)
            except InvalidSelectionError as e:
                return e
            if not selection.is_empty:
                return selection

    def _finish(self, report: SessionReport, outcome: BatchOutcome) -> None:
        report.batches.append(outcome)
        if self._reporter is not None:
            self._reporter(outcome)

    def run(self) -> SessionReport:
        """Run the session until it terminates.

        Returns:
            SessionReport describing every applied batch.

        Raises:
            WorkingDirectoryError: If listing cannot restore the working
                directory.
            TrashError: If the trash area cannot be read.
        """
        report = SessionReport()
        first = True

        while True:
            names = self.engine.list_names()
            if not names:
                report.empty = first
                break
            first = False

            self._renderer(names)
            selection = self._read_selection()

            if selection is None or (
                isinstance(selection, Selection) and selection.kind == SelectionKind.QUIT
            ):
                report.quit = True
                break

            if isinstance(selection, InvalidSelectionError):
                logger.debug("Rejected selection: %s", selection)
                self._finish(
                    report,
                    BatchOutcome(invalid_token=selection.token, remaining=self.engine.count()),
                )
                break

            if selection.kind == SelectionKind.ALL:
                results = self._apply(names)
                self._finish(
                    report, BatchOutcome(tuple(results), remaining=self.engine.count())
                )
                break

            chosen: list[str] = []
            invalid: list[int] = []
            for eln in selection.indices:
                if 1 <= eln <= len(names):
                    chosen.append(names[eln - 1])
                else:
                    invalid.append(eln)

            results = self._apply(chosen)
            remaining = self.engine.count()
            self._finish(report, BatchOutcome(tuple(results), tuple(invalid), remaining=remaining))

            if self.mode == SelectionMode.ERASE or remaining == 0:
                break

        return report
