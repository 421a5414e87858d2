from __future__ import annotations

import pytest

from vim_bufname.bufname import InvalidSchemeError, parse
from vim_bufname.runtime.telemetry import span


class Boom(RuntimeError):
    pass


def test_span_reraises_the_original_exception() -> None:
    error = Boom("exploded")

    with pytest.raises(Boom) as excinfo:
        with span("tests::boom", component="tests"):
            raise error

    assert excinfo.value is error


def test_span_reraises_rejected_input_unchanged() -> None:
    with pytest.raises(InvalidSchemeError) as excinfo:
        parse("Denops:///a")

    assert excinfo.value.value == "Denops"


def test_span_handle_keeps_seeded_and_added_metadata() -> None:
    with span("tests::metadata", metadata={"count": 3}) as handle:
        handle.add_metadata("status", "ok")

    assert handle.metadata == {"count": "3", "status": "ok"}


def test_span_returns_block_result() -> None:
    with span("tests::value") as handle:
        value = "result"

    assert value == "result"
    assert handle.span_name == "tests::value"
