from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, TypedDict

from ..utils.time import iso_timestamp

SOURCE_TAG = "shareExtension"

# Terminal states of one parse
STATUSES = ("assembled", "unrecognized", "unparseable")

UNKNOWN_FORMAT_MESSAGE = "Unknown game format"


class GameResultDict(TypedDict):
    """
    The canonical JSON record handed to the persistence side.

    This must be the ONLY shape that leaves the parser.
    """
    id: str
    gameId: str
    gameName: str
    date: str
    score: Optional[int]
    maxAttempts: int
    completed: bool
    sharedText: str
    parsedData: Dict[str, str]


class ParseOutcomeDict(TypedDict):
    status: Literal["assembled", "unrecognized", "unparseable"]
    game: Optional[str]
    message: str
    result: Optional[GameResultDict]
    issues: List[str]


@dataclass(frozen=True)
class Derived:
    """What a per-game rule decides about one share."""
    score: Optional[int]
    max_attempts: int
    completed: bool
    fields: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GameResult:
    """
    Python representation of one parsed share.

    Built once by the assembler; use .to_dict() before storing it.
    """
    id: str
    game_id: str
    game_name: str
    date: datetime
    score: Optional[int]
    max_attempts: int
    completed: bool
    shared_text: str
    parsed_data: Dict[str, str]

    @property
    def puzzle_number(self) -> Optional[str]:
        return self.parsed_data.get("puzzleNumber")

    def to_dict(self) -> GameResultDict:
        """
        Return a plain dict matching GameResultDict / the JSON schema.
        """
        return {
            "id": self.id,
            "gameId": self.game_id,
            "gameName": self.game_name,
            "date": iso_timestamp(self.date),
            "score": self.score,
            "maxAttempts": int(self.max_attempts),
            "completed": bool(self.completed),
            "sharedText": self.shared_text,
            "parsedData": dict(self.parsed_data),
        }


@dataclass
class ParseOutcome:
    """
    Result of one pass through the pipeline: either an assembled record or
    a user-visible reason why there is none.
    """
    status: str
    message: str
    game: Optional[str] = None
    result: Optional[GameResult] = None
    issues: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.status not in STATUSES:
            self.issues.append(f"Invalid status: {self.status!r}, coerced to 'unrecognized'.")
            self.status = "unrecognized"

        # No partial records: a failure never carries a result
        if self.status != "assembled" and self.result is not None:
            self.issues.append("Dropped result attached to a failed outcome.")
            self.result = None

    @property
    def ok(self) -> bool:
        return self.status == "assembled" and self.result is not None

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def to_dict(self) -> ParseOutcomeDict:
        return {
            "status": self.status,  # type: ignore[typeddict-item]
            "game": self.game,
            "message": self.message,
            "result": self.result.to_dict() if self.result is not None else None,
            "issues": list(self.issues),
        }

    @classmethod
    def assembled(cls, label: str, result: GameResult) -> "ParseOutcome":
        return cls(
            status="assembled",
            message=f"{label} result saved!",
            game=result.game_name,
            result=result,
        )

    @classmethod
    def unrecognized(cls, reason: str = UNKNOWN_FORMAT_MESSAGE) -> "ParseOutcome":
        """
        Convenience constructor when no grammar's trigger matched.
        """
        return cls(status="unrecognized", message=reason)

    @classmethod
    def unparseable(cls, game: str, reason: str, issues: Optional[List[str]] = None) -> "ParseOutcome":
        return cls(
            status="unparseable",
            message=reason,
            game=game,
            issues=list(issues or []),
        )


def record_summary(record: Dict[str, Any]) -> str:
    """One-line description of a stored record, for logs and replies."""
    score = record.get("score")
    puzzle = (record.get("parsedData") or {}).get("puzzleNumber", "?")
    state = "completed" if record.get("completed") else "not completed"
    return f"{record.get('gameName')} #{puzzle}: score={score} ({state})"
