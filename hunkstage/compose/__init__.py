"""Compose feature for hunkstage - turn a working tree into a commit stack.

This package provides the selective staging engine with:
- models: DiffLine, Hunk, FileDiff, DiffSnapshot, HunkId, PlannedCommit,
          CommitPlan, CommitResult, PlanResult and the strategy enums
- exceptions: StagingError and its subclasses
- parser: parse_unified_diff, parse_hunk_header
- capture: capture_snapshot, capture_file_hunks
- matcher: match_hunk, match_hunks
- reconstruct: reconstruct, split_lines, detect_newline
- inventory: build_hunk_inventory, format_inventory
- validation: PlanValidationError, validate_plan
- executor: StagingCoordinator, IndexSnapshot, create_index_snapshot,
            restore_index_snapshot
"""

# Models
from hunkstage.compose.models import (
    CommitPlan,
    CommitResult,
    CommitState,
    DiffLine,
    DiffLinePosition,
    DiffLineType,
    DiffSnapshot,
    FileDiff,
    Hunk,
    HunkHeader,
    HunkId,
    PlannedCommit,
    PlanResult,
    StagingStrategy,
)

# Exceptions
from hunkstage.compose.exceptions import (
    AmbiguousHunkMatchError,
    BackendError,
    CommitExecutionError,
    EmptySelectionError,
    InvalidHunkIdError,
    NoMatchingHunkError,
    ReconstructionError,
    StagingError,
    UnknownPathError,
)

# Parser
from hunkstage.compose.parser import (
    parse_hunk_header,
    parse_unified_diff,
)

# Reconstruction
from hunkstage.compose.reconstruct import (
    detect_newline,
    reconstruct,
    split_lines,
)

# Capture
from hunkstage.compose.capture import (
    capture_file_hunks,
    capture_snapshot,
)

# Matching
from hunkstage.compose.matcher import (
    match_hunk,
    match_hunks,
)

# Inventory
from hunkstage.compose.inventory import (
    build_hunk_inventory,
    format_inventory,
)

# Validation
from hunkstage.compose.validation import (
    PlanValidationError,
    validate_plan,
)

# Executor
from hunkstage.compose.executor import (
    IndexSnapshot,
    StagingCoordinator,
    create_index_snapshot,
    restore_index_snapshot,
)


__all__ = [
    # Models
    "CommitPlan",
    "CommitResult",
    "CommitState",
    "DiffLine",
    "DiffLinePosition",
    "DiffLineType",
    "DiffSnapshot",
    "FileDiff",
    "Hunk",
    "HunkHeader",
    "HunkId",
    "PlannedCommit",
    "PlanResult",
    "StagingStrategy",
    # Exceptions
    "AmbiguousHunkMatchError",
    "BackendError",
    "CommitExecutionError",
    "EmptySelectionError",
    "InvalidHunkIdError",
    "NoMatchingHunkError",
    "ReconstructionError",
    "StagingError",
    "UnknownPathError",
    # Parser
    "parse_hunk_header",
    "parse_unified_diff",
    # Reconstruction
    "detect_newline",
    "reconstruct",
    "split_lines",
    # Capture
    "capture_file_hunks",
    "capture_snapshot",
    # Matching
    "match_hunk",
    "match_hunks",
    # Inventory
    "build_hunk_inventory",
    "format_inventory",
    # Validation
    "PlanValidationError",
    "validate_plan",
    # Executor
    "IndexSnapshot",
    "StagingCoordinator",
    "create_index_snapshot",
    "restore_index_snapshot",
]
