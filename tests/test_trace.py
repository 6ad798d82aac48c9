"""Test the engine event trace."""

from conveyor.kernel import Evidence, Trace


def test_evidence_creation() -> None:
    evidence = Evidence("drain")
    assert evidence.action == "drain"
    assert evidence.parent_id is None
    assert evidence.info == {}


def test_record_links_explicit_parents() -> None:
    trace = Trace()
    begin = trace.record("action_begin", info={"index": 0})
    end = trace.record("action_end", info={"index": 0}, parent_id=begin, duration_ms=1.5)
    drain = trace.record("drain")

    events = trace.get_events()
    assert [e.action for e in events] == ["action_begin", "action_end", "drain"]
    assert events[1].parent_id == begin
    assert events[1].duration_ms == 1.5
    assert events[2].parent_id is None
    assert trace.as_tree() == {None: [begin, drain], begin: [end]}


def test_find_all_matches_info_entries() -> None:
    trace = Trace()
    trace.record("action_end", info={"index": 0})
    trace.record("action_end", info={"index": 1})
    trace.record("action_error", info={"index": 1})

    assert len(trace.find_all(index=1)) == 2
    assert len(trace.find_all(action="action_end", index=1)) == 1


def test_disabled_trace_records_nothing() -> None:
    trace = Trace(enabled=False)
    assert trace.record("enqueue") is None
    assert len(trace) == 0


def test_clear() -> None:
    trace = Trace()
    trace.record("enqueue")
    trace.clear()
    assert len(trace) == 0
    assert trace.record("enqueue") == 0
