"""
Tests for the tree-sitter Ruby adapter (arena tree with character positions).
"""

from __future__ import annotations

from backend.app.services.ruby_tree import first_error_line, parse_ruby


def test_method_spans_are_trimmed_to_source_text():
    tree = parse_ruby("class Foo\n  def bar\n    1\n  end\nend\n")
    [method] = list(tree.walk("method"))
    assert (method.first_line, method.last_line) == (2, 4)
    assert method.span.start_column == 2
    assert tree.text(method) == "def bar\n    1\n  end"
    assert tree.text(tree.field(method, "name")) == "bar"
    assert tree.parent(method) is not None


def test_offsets_are_characters_not_bytes():
    source = 'name = "héllo"\nx = 1\n'
    tree = parse_ruby(source)
    assignments = list(tree.walk("assignment"))
    assert [tree.text(a) for a in assignments] == ['name = "héllo"', "x = 1"]
    second = assignments[1]
    assert second.span.start_offset == source.index("x = 1")
    assert tree.position(second.span.start_offset) == (2, 0)


def test_comment_lines_are_collected():
    tree = parse_ruby("# header\nx = 1 # trailing\ny = 2\n")
    assert list(tree.comment_lines) == [1, 2]
    assert tree.comments_between(2, 3)
    assert not tree.comments_between(3, 3)


def test_line_helpers():
    tree = parse_ruby("def foo\n    42\nend\n")
    assert tree.line(2) == "    42"
    assert tree.line_indent(2) == 4
    assert tree.line_length(2) == 6
    assert tree.line(99) == ""


def test_parse_errors_are_flagged_not_raised():
    tree = parse_ruby("def foo(\n  1 +\nend end\n")
    assert tree.has_error
    assert first_error_line(tree) is not None


def test_valid_source_has_no_error():
    tree = parse_ruby("x = 1\n")
    assert not tree.has_error
    assert first_error_line(tree) is None
