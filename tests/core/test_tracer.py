"""
Tests for the Tracing System.
"""

from britescript.core.tracer import TraceEventType, TraceLogger


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END


def test_end_all_phases():
  logger = TraceLogger()
  logger.start_phase("A")
  logger.start_phase("B")
  logger.end_all_phases()
  logger.end_phase()  # no-op when nothing is open

  types = [e["type"] for e in logger.export()]
  assert types.count(TraceEventType.PHASE_END) == 2


def test_rewrite_metadata_and_parent():
  logger = TraceLogger()
  phase = logger.start_phase("let pass")
  logger.log_rewrite("let", "let", "const")

  event = logger.export()[-1]
  assert event["type"] == TraceEventType.REWRITE
  assert event["parent_id"] == phase
  assert event["metadata"] == {"before": "let", "after": "const"}


def test_detection_and_warning_events():
  logger = TraceLogger()
  logger.log_detection([])
  logger.log_detection(["struct", "pipe"])
  logger.log_warning("line 3: struct 'A' has no body; left unchanged")

  events = logger.export()
  assert events[0]["description"] == "Detected no extended syntax"
  assert events[1]["metadata"]["constructs"] == ["struct", "pipe"]
  assert events[2]["type"] == TraceEventType.ANALYSIS_WARNING


def test_loggers_are_independent():
  a, b = TraceLogger(), TraceLogger()
  a.log_warning("only a")
  assert b.export() == []
