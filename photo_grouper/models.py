from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class NumberedFilename:
    """
    A path split around its fixed-width counter: IMG_0815.JPG -> ("IMG_", "0815", ".JPG").
    """
    parent: Path
    prefix: str
    counter: str
    suffix: str

    @property
    def value(self) -> int:
        return int(self.counter)

    def with_counter(self, counter: str) -> Path:
        return self.parent / f"{self.prefix}{counter}{self.suffix}"


class Presence(Enum):
    """Required state of the complementary files of a candidate."""
    EXIST = "exist"
    NOT_EXIST = "not-exist"


@dataclass
class RelocationOptions:
    extensions: Sequence[str] = ()
    partner_sub_path: Optional[str] = None
    complementary_exts: Sequence[str] = ()
    presence: Presence = Presence.EXIST
    camera_models: Sequence[str] = ()
    by_day: bool = False


@dataclass
class MoveFailure:
    source: Path
    destination: Path
    error: str


@dataclass
class MoveReport:
    """
    Accumulator handed explicitly to every move.
    Failed moves are kept instead of being dropped so callers can audit them.
    """
    moved: int = 0
    failures: List[MoveFailure] = field(default_factory=list)

    def record_success(self):
        self.moved += 1

    def record_failure(self, source: Path, destination: Path, error: Exception):
        self.failures.append(MoveFailure(source, destination, str(error)))

    def merge(self, other: "MoveReport") -> "MoveReport":
        self.moved += other.moved
        self.failures.extend(other.failures)
        return self

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class PanoramaRun:
    number: int
    folder: Path
    files: List[Path] = field(default_factory=list)


@dataclass
class PanoramaResult:
    runs: List[PanoramaRun] = field(default_factory=list)
    report: MoveReport = field(default_factory=MoveReport)


@dataclass
class ExposureBracket:
    files: Tuple[Path, ...]                   # oldest frame first, anchor last
    exposures: Tuple[Optional[Fraction], ...]

    @property
    def anchor(self) -> Path:
        return self.files[-1]


@dataclass
class BracketResult:
    brackets: List[ExposureBracket] = field(default_factory=list)
    rejected: List[Path] = field(default_factory=list)   # anchors without a full bracket
    report: MoveReport = field(default_factory=MoveReport)
