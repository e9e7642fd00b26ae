"""Result dataclasses for bootstrap runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import List

import pandas as pd


@dataclass(frozen=True)
class NodeResult:
    """Single node solved during the bootstrap."""

    index: int
    helper: str
    pillar_date: date
    time: float
    value: float
    discount_factor: float
    market_quote: float
    implied_quote: float

    @property
    def error(self) -> float:
        return self.implied_quote - self.market_quote


@dataclass(frozen=True)
class BootstrapReport:
    """Aggregate output of a converged bootstrap run."""

    trait: str
    interpolation: str
    passes: int
    last_change: float
    accuracy: float
    nodes: List[NodeResult] = field(default_factory=list)

    @property
    def max_abs_error(self) -> float:
        return max((abs(n.error) for n in self.nodes), default=0.0)

    def to_frame(self) -> pd.DataFrame:
        """One row per node, indexed by pillar date."""
        rows = []
        for node in self.nodes:
            row = asdict(node)
            row["error"] = node.error
            rows.append(row)
        frame = pd.DataFrame(rows)
        if not frame.empty:
            frame = frame.set_index("pillar_date")
        return frame
