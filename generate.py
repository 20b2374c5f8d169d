"""Top-level generation interface.

Expose `generate_from_request(request)` that accepts either a parsed
`GenerationRequest` or a raw request dictionary compatible with
`src.puzzlegen.requests.parse_request`.
"""

import random
from typing import Any, Dict, Optional

from src.puzzlegen.assembler import generate_puzzle
from src.puzzlegen.difficulty import LOGIC_GRID
from src.puzzlegen.requests import GenerationRequest, parse_request
from src.puzzlegen.targets import generate_number_puzzle
from src.utils.trace import Tracer, get_tracer


def generate_from_request(request: Any, tracer: Optional[Tracer] = None) -> Dict[str, Any]:
    """
    Generate one puzzle and return it as plain data.
    Accepts:
      - GenerationRequest instances (used directly)
      - Raw request dictionaries (parsed via `parse_request`)
    Steps are recorded on `tracer`, or on the global tracer when omitted.
    """
    if isinstance(request, GenerationRequest):
        parsed = request
    elif isinstance(request, dict):
        parsed = parse_request(request)
    else:
        raise TypeError("generate_from_request expects a GenerationRequest or request dictionary")

    rng = random.Random(parsed.seed)
    tracer = tracer or get_tracer()
    if parsed.game == LOGIC_GRID:
        puzzle = generate_puzzle(parsed.grid_size, parsed.prefilled, rng=rng, tracer=tracer)
    else:
        puzzle = generate_number_puzzle(
            parsed.grid_size, parsed.max_value, parsed.targets, rng=rng, tracer=tracer
        )
    return puzzle.to_dict()


__all__ = ["generate_from_request"]
