from __future__ import annotations

import hashlib
import itertools
import os

from hypothesis import given, settings
from hypothesis import strategies as st

from assertdiagram import build_message, normalize_indentation
from assertdiagram.testing import DiagramCase, generate_cases


def _tagged(case: DiagramCase) -> str:
    # Each value renders as a unique marker so its column can be located.
    counter = itertools.count()
    msg = build_message("Assertion failed", case.source_map(), case.call_span(), case.captured_values())
    return msg.render(lambda _v: f"\x00{next(counter)}")


def _is_bar_line(line: str) -> bool:
    return bool(line) and set(line) <= {" ", "|"}


def _check_case(case: DiagramCase) -> None:
    text = _tagged(case)
    title, *lines = text.split("\n")
    assert title == "Assertion failed"

    value_lines = [ln for ln in lines if "\x00" in ln]
    assert len(value_lines) == len(case.captured)

    prev_col = None
    for k, line in enumerate(lines):
        if "\x00" not in line:
            prev_col = None
            continue
        col = line.index("\x00")
        j = k - 1
        while "\x00" in lines[j]:
            j -= 1
        bar = lines[j]
        assert _is_bar_line(bar), (case.name, bar)
        assert bar[col] == "|", (case.name, line, bar)
        prefix = line[:col]
        assert set(prefix) <= {" ", "|"}
        assert all(ch == " " or bar[n] == "|" for n, ch in enumerate(prefix))
        # Rightmost value first.
        if prev_col is not None:
            assert col <= prev_col
        prev_col = col

    sm = case.source_map()
    call_span = case.call_span()
    start, _ = sm.resolve(call_span)
    expected = normalize_indentation(sm.slice(call_span), start.column - 1).split("\n")
    source_lines = [ln for ln in lines if "\x00" not in ln and not _is_bar_line(ln)]
    assert source_lines == expected


def test_generated_corpus_is_aligned() -> None:
    seed = int(os.environ.get("ASSERTDIAGRAM_CORPUS_SEED", "1"))
    count = int(os.environ.get("ASSERTDIAGRAM_CORPUS_CASES", "500"))
    for case in generate_cases(seed=seed, count=count):
        _check_case(case)


def test_generated_corpus_renders_deterministically() -> None:
    def digest() -> str:
        h = hashlib.sha256()
        for case in generate_cases(seed=7, count=200):
            h.update(_tagged(case).encode("utf-8"))
            h.update(b"\n---\n")
        return h.hexdigest()

    assert digest() == digest()


@given(st.integers(min_value=0, max_value=2**32 - 1))
@settings(max_examples=300)
def test_fuzz_alignment(seed: int) -> None:
    (case,) = generate_cases(seed=seed, count=1)
    _check_case(case)
