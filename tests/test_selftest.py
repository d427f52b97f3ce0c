import logging

from cornerkube import Slot, run_self_test
from cornerkube import selftest


def test_self_test_passes(caplog):
    caplog.set_level(logging.INFO, logger="cornerkube")
    assert run_self_test() == []
    assert "All cube move identity tests passed" in caplog.text


def test_self_test_reports_wrong_expectations(monkeypatch):
    monkeypatch.setattr(
        selftest, "SCENARIO_CASES", [(Slot.ULB, 2, "B' U'", Slot.URB, 0)]
    )
    monkeypatch.setattr(selftest, "CYCLE_CASES", {"U": {0: 3}})
    failures = run_self_test()
    assert len(failures) == 2
    assert failures[0] == "Cycle fail U slot 0 -> expected 3"
    assert failures[1].startswith("Scenario B' U' expected URB twist 0")
