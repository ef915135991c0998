import pytest

from klevret.common.defer import Defer


def test_callback_runs_only_after_block():
    counter = {"value": 10}

    def bump():
        counter["value"] += 1

    defer = Defer(bump)
    with defer as entered:
        assert entered is defer
        assert counter["value"] == 10
    assert counter["value"] == 11


def test_callback_runs_when_block_raises():
    calls = []
    with pytest.raises(RuntimeError):
        with Defer(lambda: calls.append("done")):
            raise RuntimeError("boom")
    assert calls == ["done"]


def test_enter_returns_the_defer_itself():
    calls = []
    defer = Defer(lambda: calls.append(1))
    with defer as entered:
        assert entered is defer
        assert calls == []
    assert calls == [1]