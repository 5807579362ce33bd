"""
Compilation Trace Logger.

Records the step-by-step execution of a single compilation:
1. Lifecycle Phases (Detection, Parsing, Rewriting, Emission).
2. Rewrites (`struct User` became `type User`).
3. Warnings about constructs that were recognised but left unchanged.

The output is a structured list of Event Log dictionaries suitable for JSON
serialization. A logger is created per compilation and never shared.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  REWRITE = "rewrite"
  DETECTION = "detection"
  ANALYSIS_WARNING = "analysis_warning"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records compilation events for inspection and the CLI `--json-trace` dump.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g., 'Rewrite Pipeline'). Returns Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    event = TraceEvent(
      id=phase_id,
      type=TraceEventType.PHASE_START,
      timestamp=time.time(),
      description=name,
      parent_id=parent,
      metadata={"detail": description},
    )
    self._events.append(event)
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    event = TraceEvent(
      id=str(uuid.uuid4()),
      type=TraceEventType.PHASE_END,
      timestamp=time.time(),
      description="End Phase",
      parent_id=phase_id,
    )
    self._events.append(event)

  def end_all_phases(self):
    """Closes every open phase (used when the pipeline aborts)."""
    while self._active_phases:
      self.end_phase()

  def log_detection(self, constructs: List[str]):
    """Logs the constructs found by the syntax pre-scan."""
    self._log_simple(
      TraceEventType.DETECTION,
      f"Detected {', '.join(constructs) if constructs else 'no extended syntax'}",
      {"constructs": list(constructs)},
    )

  def log_rewrite(self, construct: str, before: str, after: str):
    """Logs a construct rewrite."""
    self._log_simple(TraceEventType.REWRITE, f"Rewrote {construct}", {"before": before, "after": after})

  def log_warning(self, message: str):
    self._log_simple(TraceEventType.ANALYSIS_WARNING, message, {"level": "warning"})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
