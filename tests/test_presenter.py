#!/usr/bin/env python3
"""
WHEREAMI TEST SUITE - Presentation & Elision
--------------------------------------------
"""

import pytest

from whereami.core.models import Context, LineRecord
from whereami.rendering.presenter import BreadcrumbPresenter

OUTER = Context(index=0, text=b"void f() {")


def test_far_contexts_are_printed():
    crumbs = BreadcrumbPresenter().breadcrumb(50, [OUTER, Context(25, b"if (x) {")])
    assert crumbs == "..1: void f(..26: if(x){"


def test_near_contexts_are_elided_with_one_marker():
    crumbs = BreadcrumbPresenter().breadcrumb(50, [OUTER, Context(40, b"if (x) {"), Context(45, b"if (y) {")])
    assert crumbs == "..1: void f(..."
    assert crumbs.count("...") == 1


@pytest.mark.parametrize("ctx_index, elided", [(0, False), (1, True), (19, True)])
def test_elision_boundary(ctx_index, elided):
    crumbs = BreadcrumbPresenter().breadcrumb(20, [Context(ctx_index, b"x")])
    assert crumbs.endswith("...") is elided


def test_empty_chain():
    assert BreadcrumbPresenter().breadcrumb(3, []) == ""


def test_summary_header():
    presenter = BreadcrumbPresenter()
    assert presenter.header(5, LineRecord(None, 4, 0)) == "    6:     0<-  4: "
    assert presenter.header(99999, LineRecord(2, 16, 0)) == "100000:     3<- 16: "
    assert presenter.summary_line(30, LineRecord(0, 4, 0), [OUTER]) == "   31:     1<-  4: ..1: void f("
