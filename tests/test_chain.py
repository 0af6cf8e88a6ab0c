#!/usr/bin/env python3
"""
WHEREAMI TEST SUITE - Context Chain Walker
------------------------------------------
Ancestor walks, boring-line resolution and outermost-first ordering.
"""

import pytest

from conftest import source
from whereami.core.errors import QueryError
from whereami.query.chain import ContextChainWalker
from whereami.rendering.labeler import ContextLabeler


def test_chain_of_nested_call(index):
    idx = index(source(
        "void f() {",
        "    if (x) {",
        "        do_work();",
        "    }",
        "}",
    ))
    walker = ContextChainWalker(idx)
    labels = [ContextLabeler().label(c) for c in walker.chain(2)]

    assert labels == ["..1: void f(", "..2: if(x){"]
    assert walker.chain(0) == []
    assert walker.chain(4) == []


def test_brace_only_ancestors_resolve_to_headers(index):
    idx = index(source(
        "void f()",
        "{",
        "    if (x)",
        "    {",
        "        y();",
        "    }",
        "}",
    ))
    walker = ContextChainWalker(idx)
    assert walker.ancestors(4) == [3, 1]
    assert [c.index for c in walker.chain(4)] == [0, 2]
    assert [c.text for c in walker.chain(4)] == [b"void f()", b"if (x)"]


def test_consecutive_brace_lines_are_skipped(index):
    idx = index(source(
        "int main()",
        "{",
        "{",
        "    x();",
    ))
    walker = ContextChainWalker(idx)
    assert walker.ancestors(3) == [2]
    assert walker.resolve(2) == 0


def test_first_line_brace_is_kept(index):
    idx = index(source("{", "    x();"))
    assert [c.index for c in ContextChainWalker(idx).chain(1)] == [0]


def test_fixture_breadcrumb(index, fixtures_dir):
    """Labels and case lines never show up as contexts."""
    idx = index((fixtures_dir / "widget.cpp").read_bytes(), "widget.cpp")
    walker = ContextChainWalker(idx)
    labeler = ContextLabeler()

    draw_line = 19
    assert idx.text(draw_line) == b"draw(i); // odd"
    assert [labeler.label(c) for c in walker.chain(draw_line)] == [
        "..7: class Widget:public Base{",
        "..11: int render(",
        "..18: for(int i=0;i<depth;",
        "..19: if(i%2){",
    ]

    return_line = 13
    assert [c.index for c in walker.chain(return_line)] == [6, 10, 11]


def test_all_chains_covers_every_line(index):
    idx = index(source("a {", "    b;", "}"))
    chains = list(ContextChainWalker(idx).all_chains())
    assert [i for i, _ in chains] == [0, 1, 2]
    assert [len(c) for _, c in chains] == [0, 1, 0]


@pytest.mark.parametrize("target", [-1, 3])
def test_out_of_range_query(index, target):
    idx = index(source("a", "b", "c"))
    with pytest.raises(QueryError):
        ContextChainWalker(idx).chain(target)
