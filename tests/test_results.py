"""
Multi-status envelope tests
"""

from websearch.results import MultiStatus, RunResult


def make_envelope(*statuses):
    envelope = MultiStatus()
    for index, status in enumerate(statuses):
        envelope.add_result(status, "OK" if status == 200 else "Failed", index)
    return envelope


def test_all_success():
    envelope = make_envelope(200, 200)
    assert envelope.status == 200
    assert envelope.message == "All success"
    assert envelope.failures == []


def test_mixed():
    envelope = make_envelope(200, 500, 200)
    assert envelope.status == 207
    assert [item.item_id for item in envelope.failures] == [1]


def test_all_failed_same_status():
    assert make_envelope(409, 409).status == 409


def test_all_failed_mixed_statuses():
    envelope = make_envelope(409, 500)
    assert envelope.status == 500
    assert envelope.message == "All failed"


def test_as_struct():
    struct = make_envelope(200, 500).as_struct()
    assert struct["status"] == 207
    assert struct["results"][1] == {"status": 500, "message": "Failed", "item_id": 1}


def test_run_result_ok():
    assert RunResult(action="print_url").ok
    assert not RunResult(action="open_url", envelope=make_envelope(500)).ok
