"""Plan validation for hunkstage compose module.

Contains:
- PlanValidationError: Exception for validation errors
- validate_plan: Validate a commit plan against the captured snapshot
"""

from hunkstage.compose.exceptions import InvalidHunkIdError
from hunkstage.compose.models import CommitPlan, DiffSnapshot, HunkId, StagingStrategy
from hunkstage.git import DiffStrategy


class PlanValidationError(Exception):
    """Error during plan validation."""

    pass


def _summarize(items: list[str], limit: int = 5) -> str:
    text = ", ".join(items[:limit])
    if len(items) > limit:
        text += f" and {len(items) - limit} more"
    return text


def validate_plan(
    plan: CommitPlan, snapshot: DiffSnapshot, strategy: StagingStrategy
) -> list[str]:
    """Validate a commit plan against the captured snapshot.

    Hunks or files no commit claims are not errors; they are recorded in
    plan.warnings and reported as unapplied once the plan has run.

    Args:
        plan: The commit plan to validate
        snapshot: The snapshot the plan was made for
        strategy: The staging strategy the plan will run with

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[str] = []

    if len(plan.commits) == 0:
        errors.append("Plan has no commits")

    if snapshot.strategy is DiffStrategy.STAGED and strategy is not StagingStrategy.ALL_FILES_ONE_COMMIT:
        errors.append(
            "A staged-only snapshot can only be committed with the all-files strategy"
        )

    if strategy is StagingStrategy.ALL_FILES_ONE_COMMIT:
        if len(plan.commits) > 1:
            errors.append(
                f"Plan has {len(plan.commits)} commits, the all-files strategy creates exactly one"
            )
        return errors

    used_hunks: set[str] = set()
    used_files: set[str] = set()
    whole_file_owner: dict[str, int] = {}

    for number, commit in enumerate(plan.commits, start=1):
        if strategy is StagingStrategy.HUNKS:
            if commit.files:
                errors.append(f"Commit {number} lists files; the hunks strategy takes hunk ids")
            if not commit.hunk_ids:
                errors.append(f"Commit {number} has no hunks")
                continue

            for raw_id in commit.hunk_ids:
                try:
                    hunk_id = HunkId.parse(raw_id)
                except InvalidHunkIdError as e:
                    errors.append(f"Commit {number}: {e}")
                    continue

                file_diff = snapshot.get_file(hunk_id.path)
                if file_diff is None:
                    errors.append(f"Commit {number} references unknown file: {hunk_id.path}")
                    continue

                if file_diff.stages_whole:
                    # Any id of such a file claims the whole file
                    owner = whole_file_owner.setdefault(hunk_id.path, number)
                    if owner != number:
                        errors.append(f"File {hunk_id.path} is used in multiple commits")
                    used_files.add(hunk_id.path)
                    continue

                if file_diff.get_hunk(hunk_id.index) is None:
                    errors.append(f"Commit {number} references unknown hunk: {hunk_id}")
                elif str(hunk_id) in used_hunks:
                    errors.append(f"Hunk {hunk_id} is used in multiple commits")
                else:
                    used_hunks.add(str(hunk_id))
        else:
            if commit.hunk_ids:
                errors.append(f"Commit {number} lists hunk ids; the {strategy.value} strategy takes files")
            if not commit.files:
                errors.append(f"Commit {number} has no files")
                continue
            if strategy is StagingStrategy.ONE_FILE_PER_COMMIT and len(commit.files) > 1:
                errors.append(f"Commit {number} lists {len(commit.files)} files, expected one")

            for path in commit.files:
                if snapshot.get_file(path) is None:
                    errors.append(f"Commit {number} references unknown file: {path}")
                elif path in used_files:
                    errors.append(f"File {path} is used in multiple commits")
                else:
                    used_files.add(path)

    # Check that everything is assigned
    unassigned = [
        str(hunk_id)
        for hunk_id in snapshot.remaining_hunk_ids()
        if str(hunk_id) not in used_hunks and hunk_id.path not in used_files
    ]
    unassigned += [path for path in snapshot.unapplied_files() if path not in used_files]
    if unassigned:
        # This is a warning, not an error
        plan.warnings.append(f"Unassigned changes: {_summarize(unassigned)}")

    return errors
