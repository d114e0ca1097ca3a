# tests/test_emitter_and_cli.py

"""StepEmitter ordering and the headless command-line runner."""

import pytest

from stepsort import StepEmitter
from stepsort.__main__ import build_parser, main


def test_emitter_delivers_in_order_to_every_subscriber():
    emitter = StepEmitter()
    first, second = [], []
    emitter.subscribe(first.append)
    emitter.subscribe(second.append)
    for item in range(5):
        emitter.emit(item)
    assert first == second == [0, 1, 2, 3, 4]
    assert len(emitter) == 2


def test_unsubscribe_stops_delivery():
    emitter = StepEmitter()
    seen = []
    unsubscribe = emitter.subscribe(seen.append)
    emitter.emit("a")
    unsubscribe()
    unsubscribe()
    emitter.emit("b")
    assert seen == ["a"]
    assert len(emitter) == 0


def test_subscriber_errors_propagate():
    emitter = StepEmitter()

    def broken(_):
        raise ValueError("boom")
    emitter.subscribe(broken)
    with pytest.raises(ValueError):
        emitter.emit(1)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.algorithm == "bubble"
    assert args.delay_ms is None
    assert not args.quiet


def test_cli_runs_to_completion(capsys):
    code = main(["--algorithm", "counting", "--size", "12", "--delay-ms", "0",
                 "--seed", "3", "--quiet"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Counting Sort: completed" in out
    assert "swaps:       12" in out


def test_cli_rejects_bad_size(capsys):
    assert main(["--size", "0", "--quiet"]) == 2


def test_cli_rejects_unknown_algorithm():
    with pytest.raises(SystemExit):
        main(["--algorithm", "bogo"])
