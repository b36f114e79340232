"""
Sort the flat output folder into dated per-CU subfolders.

A file goes to <output_root>/<label>_<YYYYMMDD>/<filename>, where label comes from
the first rule (in declared order) whose keyword occurs in the filename. The plan
is built without touching the filesystem, so it can be reviewed (dry run) before
execute_plan moves anything.
"""
from __future__ import annotations
import logging
import os
import re
import shutil
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Literal, Optional, Sequence
import pandas as pd
from .config import DATE_FORMAT, DEFAULT_RULES

logger = logging.getLogger(__name__)

NO_MATCH = "no rule match"
EXISTS = "exists"


@dataclass(frozen=True)
class Rule:
    """
    Keyword -> destination label. Matching is case-insensitive; the keyword is a
    literal substring unless regex=True.
    """
    keyword: str
    label: str
    regex: bool = False

    def __post_init__(self):
        if not self.keyword:
            raise ValueError(f"Rule for {self.label!r} has an empty keyword")
        if not self.label:
            raise ValueError(f"Rule for keyword {self.keyword!r} has an empty label")
        pattern = self.keyword if self.regex else re.escape(self.keyword)
        try:
            compiled = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Invalid rule pattern {self.keyword!r}: {e}") from e
        object.__setattr__(self, "_pattern", compiled)

    def matches(self, filename: str) -> bool:
        return self._pattern.search(filename) is not None


def make_rules(pairs: Iterable[tuple[str, str]], regex: bool = False) -> list[Rule]:
    """Build an ordered rule table from (keyword, label) pairs."""
    return [Rule(keyword, label, regex=regex) for keyword, label in pairs]

DEFAULT_RULE_TABLE = make_rules(DEFAULT_RULES)


def load_rules(path: str | Path) -> list[Rule]:
    """
    Read an ordered rule table from a CSV with columns keyword,label[,regex].
    Row order is rule priority.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = df.columns.str.strip().str.lower()
    missing = [c for c in ("keyword", "label") if c not in df.columns]
    if missing:
        raise ValueError(f"Rule file {path} is missing column(s): {', '.join(missing)}")
    flags = df["regex"] if "regex" in df.columns else pd.Series("", index=df.index)
    rules = []
    for keyword, label, flag in zip(df["keyword"], df["label"], flags):
        rules.append(Rule(keyword.strip(), label.strip(), regex=flag.strip().lower() in ("1", "true", "yes")))
    return rules


def classify(filename: str, rules: Sequence[Rule]) -> Optional[str]:
    """Label of the first rule matching filename, or None when no rule matches."""
    for rule in rules:
        if rule.matches(filename):
            return rule.label
    return None


def format_day(today: date | datetime | str | None = None) -> str:
    """YYYYMMDD suffix for destination folders; accepts a date or a YYYYMMDD string."""
    if today is None:
        today = date.today()
    if isinstance(today, str):
        # strptime alone accepts single-digit months and days
        if re.fullmatch(r"[0-9]{8}", today) is None:
            raise ValueError(f"Date {today!r} is not in YYYYMMDD form")
        try:
            return datetime.strptime(today, DATE_FORMAT).strftime(DATE_FORMAT)
        except ValueError:
            raise ValueError(f"Date {today!r} is not in YYYYMMDD form") from None
    return today.strftime(DATE_FORMAT)


# -------------------------------
# Plan
# -------------------------------

@dataclass(frozen=True)
class PlanEntry:
    source: Path
    destination: Optional[Path]
    label: Optional[str]
    exists: Optional[bool]

    @property
    def reason(self) -> str:
        return "ok" if self.destination is not None else NO_MATCH


def list_candidates(directory: Path) -> list[Path]:
    """CSV files directly inside directory (extension case-insensitive), sorted by name."""
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".csv"),
        key=lambda p: p.name,
    )


def build_plan(directory: str | Path, rules: Sequence[Rule], today: date | datetime | str | None = None) -> list[PlanEntry]:
    """
    Classify every CSV in directory and compute its destination.

    Reads the directory listing and checks whether destinations exist; never
    creates, moves or deletes anything.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Output folder not found: {directory}")
    suffix = format_day(today)
    plan = []
    for src in list_candidates(directory):
        label = classify(src.name, rules)
        if label is None:
            plan.append(PlanEntry(src, None, None, None))
            continue
        dst = directory / f"{label}_{suffix}" / src.name
        plan.append(PlanEntry(src, dst, label, dst.exists()))
    return plan


def plan_to_frame(plan: Sequence[PlanEntry]) -> pd.DataFrame:
    """Plan as a review table with columns src, dst, reason, exists."""
    return pd.DataFrame(
        {
            "src": [str(e.source) for e in plan],
            "dst": [str(e.destination) if e.destination is not None else None for e in plan],
            "reason": [e.reason for e in plan],
            "exists": pd.array([e.exists for e in plan], dtype="boolean"),
        },
        columns=["src", "dst", "reason", "exists"],
    )


# -------------------------------
# Execution
# -------------------------------

MoveStatus = Literal["moved", "skipped", "failed"]

@dataclass(frozen=True)
class MoveOutcome:
    entry: PlanEntry
    status: MoveStatus
    reason: Optional[str] = None
    method: Optional[Literal["rename", "copy"]] = None


def _copy_then_remove(src: Path, dst: Path) -> None:
    """
    Copy src next to dst under a temporary name, swap it into place, then remove src.
    If the copy fails the temporary file is cleaned up and src is untouched.
    """
    tmp = dst.with_name(f".{dst.name}.partial")
    try:
        shutil.copy2(src, tmp)
        os.replace(tmp, dst)
    except OSError:
        with suppress(OSError):
            tmp.unlink()
        raise
    src.unlink()


def _move(entry: PlanEntry) -> MoveOutcome:
    src, dst = entry.source, entry.destination
    try:
        os.replace(src, dst)
        return MoveOutcome(entry, "moved", method="rename")
    except OSError as e:
        logger.debug("Rename %s -> %s failed (%s); falling back to copy", src, dst, e)

    try:
        _copy_then_remove(src, dst)
    except OSError as e:
        if dst.exists() and src.exists():
            return MoveOutcome(entry, "failed", f"copied but source not removed: {e}", method="copy")
        return MoveOutcome(entry, "failed", str(e), method="copy")
    return MoveOutcome(entry, "moved", method="copy")


def _ensure_folders(plan: Sequence[PlanEntry]) -> dict[Path, str]:
    """Create each distinct destination folder once; returns folders that could not be created."""
    failed: dict[Path, str] = {}
    folders = sorted({e.destination.parent for e in plan if e.destination is not None})
    for folder in folders:
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create %s: %s", folder, e)
            failed[folder] = str(e)
    return failed


def execute_plan(plan: Sequence[PlanEntry], overwrite: bool = False) -> list[MoveOutcome]:
    """
    Move every classified file to its destination.

    Per entry: unclassified -> skipped ("no rule match"); destination present and
    not overwrite -> skipped ("exists"); otherwise renamed, or copied then removed
    when the rename fails. A failure only affects its own file, and a failed file
    is always still at its source path.

    Returns:
        One MoveOutcome per plan entry, in plan order
    """
    folder_errors = _ensure_folders(plan)
    outcomes = []
    for entry in plan:
        if entry.destination is None:
            logger.info("Skipping (no rule): %s", entry.source.name)
            outcomes.append(MoveOutcome(entry, "skipped", NO_MATCH))
            continue
        if entry.destination.exists() and not overwrite:
            logger.info("Skipping (exists): %s", entry.destination)
            outcomes.append(MoveOutcome(entry, "skipped", EXISTS))
            continue
        folder = entry.destination.parent
        if folder in folder_errors:
            outcomes.append(MoveOutcome(entry, "failed", f"cannot create {folder}: {folder_errors[folder]}"))
            continue
        outcome = _move(entry)
        if outcome.status == "moved":
            logger.info("Moved%s: %s -> %s", " via copy/remove" if outcome.method == "copy" else "",
                        entry.source.name, entry.destination)
        else:
            logger.warning("Failed to move %s -> %s: %s", entry.source, entry.destination, outcome.reason)
        outcomes.append(outcome)
    return outcomes


# -------------------------------
# Run
# -------------------------------

@dataclass
class SortSettings:
    output_root: Path
    rules: Sequence[Rule] = field(default_factory=lambda: list(DEFAULT_RULE_TABLE))
    dry_run: bool = False
    overwrite: bool = False
    today: date | datetime | str | None = None


@dataclass
class SortReport:
    plan: list[PlanEntry]
    outcomes: list[MoveOutcome] = field(default_factory=list)
    dry_run: bool = False

    def count(self, status: MoveStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def moved(self) -> int:
        return self.count("moved")

    @property
    def skipped(self) -> int:
        return self.count("skipped")

    @property
    def failed(self) -> int:
        return self.count("failed")

    @property
    def unmatched(self) -> int:
        return sum(1 for e in self.plan if e.destination is None)


def sort_outputs(settings: SortSettings) -> SortReport:
    """Build the plan for settings.output_root and execute it unless dry_run is set."""
    plan = build_plan(settings.output_root, settings.rules, settings.today)
    logger.info("Planned %d file(s), %d without a rule", len(plan), sum(e.destination is None for e in plan))
    if settings.dry_run:
        logger.info("Dry run enabled: no files moved.")
        return SortReport(plan, dry_run=True)
    return SortReport(plan, execute_plan(plan, overwrite=settings.overwrite))
