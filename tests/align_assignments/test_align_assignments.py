"""
Tests for assignment alignment (TC1002).
"""

from __future__ import annotations

from textwrap import dedent

import pytest

from backend.app.config import build_settings
from backend.app.models.engine import PolicyKind
from backend.app.services.autofix_service import AutofixService
from backend.app.services.linting_service import LintingService


@pytest.fixture
def settings():
    others = [kind for kind in PolicyKind if kind != PolicyKind.ALIGN_ASSIGNMENTS]
    return build_settings({"max_line_length": 80, "disabled_policies": others})


@pytest.fixture
def correct(settings):
    service = AutofixService(LintingService(settings))

    def _correct(source: str) -> str:
        report = service.autocorrect(dedent(source))
        return report.fixed_code if report.applied else report.original_code

    return _correct


@pytest.fixture
def issues(settings):
    linter = LintingService(settings)
    return lambda source: linter.lint(dedent(source)).issues


def test_aligns_simple_assignments(correct):
    source = """\
        x = 1
        foo = 2
        barbaz = 3
        """
    assert correct(source) == dedent(
        """\
        x      = 1
        foo    = 2
        barbaz = 3
        """
    )


def test_aligns_compound_operators(correct):
    source = """\
        x += 1
        foo ||= default
        barbaz &&= check
        """
    assert correct(source) == dedent(
        """\
        x      += 1
        foo    ||= default
        barbaz &&= check
        """
    )


def test_aligns_mixed_simple_and_compound(correct):
    source = """\
        data ||= attrs
        options = { actor: actor }
        managed = extract(data)
        """
    assert correct(source) == dedent(
        """\
        data    ||= attrs
        options = { actor: actor }
        managed = extract(data)
        """
    )


def test_aligns_variables_and_constants(correct):
    source = """\
        @x = 1
        @@count = 2
        $stdout_sync = 3
        Foo::BAR = 4
        """
    assert correct(source) == dedent(
        """\
        @x           = 1
        @@count      = 2
        $stdout_sync = 3
        Foo::BAR     = 4
        """
    )


def test_blank_line_splits_groups(correct):
    source = """\
        x = 1
        foo = 2

        a = 10
        barbaz = 20
        """
    assert correct(source) == dedent(
        """\
        x   = 1
        foo = 2

        a      = 10
        barbaz = 20
        """
    )


def test_other_statement_splits_groups(correct):
    source = """\
        x = 1
        foo = 2
        do_something()
        a = 10
        barbaz = 20
        """
    assert correct(source) == dedent(
        """\
        x   = 1
        foo = 2
        do_something()
        a      = 10
        barbaz = 20
        """
    )


def test_comment_line_splits_groups(correct):
    source = """\
        x = 1
        foo = 2
        # limits
        a = 10
        barbaz = 20
        """
    assert correct(source) == dedent(
        """\
        x   = 1
        foo = 2
        # limits
        a      = 10
        barbaz = 20
        """
    )


def test_heredoc_breaks_the_group(correct):
    source = """\
        a = 1
        bb = 2
        msg = <<~TEXT
          Hello
        TEXT
        c = 3
        dd = 4
        """
    assert correct(source) == dedent(
        """\
        a  = 1
        bb = 2
        msg = <<~TEXT
          Hello
        TEXT
        c  = 3
        dd = 4
        """
    )


def test_no_alignment_if_any_line_would_overflow(issues):
    source = """\
        x = "a moderately long value that takes up space"
        this_is_an_extremely_long_variable_name = "short"
        """
    assert issues(source) == []


def test_single_and_already_aligned_assignments_are_left_alone(issues):
    assert issues("x = 1\n") == []
    source = """\
        x      = 1
        foo    = 2
        barbaz = 3
        """
    assert issues(source) == []


def test_only_same_indentation_aligns(correct):
    source = """\
        x = 1
        if condition
          y = 2
          foo = 3
        end
        z = 4
        """
    assert correct(source) == dedent(
        """\
        x = 1
        if condition
          y   = 2
          foo = 3
        end
        z = 4
        """
    )


def test_skips_element_and_attribute_assignment(issues):
    source = """\
        hash[:a] = 1
        hash[:foo] = 2
        obj.name = 3
        obj.longer_name = 4
        """
    assert issues(source) == []


def test_multi_assignment_breaks_the_group(correct):
    source = """\
        a, b = [1, 2]
        x = 3
        foo = 4
        """
    assert correct(source) == dedent(
        """\
        a, b = [1, 2]
        x   = 3
        foo = 4
        """
    )


def test_skips_assignments_inside_blocks(issues):
    source = """\
        items.map do |item|
          x = item.value
          foo = item.name
        end
        """
    assert issues(source) == []

    source = """\
        items.each { |item| count += 1 }
        total = 100
        """
    assert issues(source) == []


def test_block_between_groups_splits_them(correct):
    source = """\
        x = 1
        foo = 2
        items.each { |i| count += 1 }
        a = 3
        barbaz = 4
        """
    assert correct(source) == dedent(
        """\
        x   = 1
        foo = 2
        items.each { |i| count += 1 }
        a      = 3
        barbaz = 4
        """
    )


def test_padding_is_a_pure_insertion_before_the_operator(issues):
    source = """\
        x = 1
        foo = 2
        """
    [issue] = issues(source)
    assert issue.rule_id == "TC1002"
    assert issue.message == "Align assignment with other assignments in group"
    assert issue.line == 1
    assert issue.edit is not None
    assert (issue.edit.start, issue.edit.end, issue.edit.text) == (2, 2, "  ")
