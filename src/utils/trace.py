"""Tracing module: logs puzzle generation steps and writes to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the generation process."""

    timestamp: float
    step_number: int
    action_type: str  # 'place', 'backtrack', 'uniqueness_check', 'clue_added', 'fallback', etc.
    generator: Optional[str] = None
    cell: Optional[str] = None
    value: Optional[Any] = None
    count: Optional[int] = None  # solutions found, clues placed, nodes visited...
    is_valid: Optional[bool] = None
    reason: Optional[str] = None


class Tracer:
    """Records generation steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_place(self, generator: str, cell: Any, value: Any):
        """Log a symbol placed on the grid."""
        self._record('place', generator=generator, cell=str(cell), value=str(value))

    def log_backtrack(self, generator: str, cell: Any, reason: str = "No valid values"):
        """Log a cell reset after all candidates failed."""
        self._record('backtrack', generator=generator, cell=str(cell), reason=reason)

    def log_solution_found(self, generator: str, count: int):
        """Log a completed grid."""
        self._record('solution_found', generator=generator, count=count)

    def log_uniqueness_check(self, clues: int, solutions: int, nodes: int):
        """Log one uniqueness counter run."""
        self._record(
            'uniqueness_check',
            generator='verifier',
            count=solutions,
            is_valid=solutions == 1,
            reason=f"{clues} clues, visited {nodes} nodes",
        )

    def log_clue_added(self, cell: Any, value: Any, clues: int):
        """Log a cell revealed as a clue."""
        self._record('clue_added', generator='assembler', cell=str(cell), value=str(value), count=clues)

    def log_target_accepted(self, total: int, cells: List[int], attempts: int):
        """Log a target sum accepted by the number puzzle generator."""
        self._record(
            'target_accepted',
            generator='targets',
            cell=str(cells),
            value=str(total),
            count=attempts,
        )

    def log_fallback(self, generator: str, reason: str):
        """Log a best-effort result accepted after the retry cap was reached."""
        self._record('fallback', generator=generator, is_valid=False, reason=reason)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'generator', 'cell',
            'value', 'count', 'is_valid', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts: Dict[str, int] = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_placements': action_counts.get('place', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_fallbacks': action_counts.get('fallback', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
