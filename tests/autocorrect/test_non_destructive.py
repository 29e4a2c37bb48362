"""
Rewrites only move whitespace and layout keywords: the output must re-parse
cleanly to the same tree (named nodes, in order, with identical leaf text).
"""

from __future__ import annotations

from textwrap import dedent

import pytest

from backend.app.config import build_settings
from backend.app.services.autofix_service import AutofixService
from backend.app.services.linting_service import LintingService
from backend.app.services.ruby_tree import parse_ruby

# Containers whose presence depends on the layout chosen, not on the program
LAYOUT_KINDS = frozenset({"body_statement", "then"})

SOURCES = {
    "condense-when": """\
        case code
        when 1, 2
          :low
        when 300
          "high"
        else
          nil
        end
        """,
    "align-assignments": """\
        x = 1
        total += 2
        @name ||= "n/a"
        """,
    "align-methods": """\
        def a = 1
        def bcd() 2 end
        def self.efgh = 3
        """,
    "endless": """\
        def add(a, b)
          a + b
        end
        """,
    "endless-without-parens": """\
        def add a, b
          a + b
        end
        """,
    "singleton": """\
        def self.version
          VERSION
        end
        """,
    "traditional-if": """\
        def clear!
          data_layer.clear! if data_layer.respond_to?(:clear!)
        end
        """,
    "and": """\
        def both(a, b)
          a and b
        end
        """,
    "or": """\
        def either(a, b)
          a or b
        end
        """,
    "not": """\
        def negate(a)
          not a
        end
        """,
    "while": """\
        def spin(a)
          a.step while a.busy?
        end
        """,
    "until": """\
        def wait(a)
          a.poll until a.ready?
        end
        """,
    "nested": """\
        def build
          configure(
            x = 1,
            yy = 2
          )
        end
        """,
    "linearize-then-align": """\
        def foo
          1
        end
        def barbaz
          2
        end
        """,
}


def _shape(source: str):
    tree = parse_ruby(source)
    assert not tree.has_error
    shape = []
    for node in tree.walk():
        if not node.named or node.kind in LAYOUT_KINDS:
            continue
        if node.kind == "method_parameters" and not tree.named_children(node):
            continue
        shape.append((node.kind, tree.text(node) if not node.children else None))
    return shape


@pytest.fixture
def service():
    return AutofixService(LintingService(build_settings({"max_line_length": 120})))


@pytest.mark.parametrize("source", list(SOURCES.values()), ids=list(SOURCES))
def test_rewrite_preserves_the_parse_tree(service, source):
    source = dedent(source)
    report = service.autocorrect(source)

    assert report.applied is True
    assert report.converged is True
    assert _shape(report.fixed_code) == _shape(source)
