from typing import NamedTuple

from resume_tailor.models import ProgressCallback


class StageWindow(NamedTuple):
    """The slice of the global 0-100 progress bar owned by one stage."""
    start: float
    weight: float


# The apply stage rewrites the whole document, so it gets the widest window.
STAGE_WINDOWS = {
    "analyze": StageWindow(5, 15),
    "strategize": StageWindow(20, 20),
    "apply": StageWindow(40, 30),
    "validate": StageWindow(70, 20),
    "finalize": StageWindow(90, 10),
}


def interpolate(stage_start: float, stage_weight: float, local_pct: float) -> float:
    """Maps a stage-local 0-100 percentage onto the stage's global window."""
    local_pct = max(0.0, min(100.0, local_pct))
    return stage_start + (local_pct / 100) * stage_weight


def scoped_progress(on_progress: ProgressCallback, window: StageWindow) -> ProgressCallback:
    """Wraps the global callback so a stage can report in its own 0-100 scale."""

    def report(local_pct: float, message: str) -> None:
        on_progress(interpolate(window.start, window.weight, local_pct), message)

    return report
