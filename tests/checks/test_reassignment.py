# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for same-scope variable reassignment detection."""

from __future__ import annotations

import textwrap

from scadlint.checks.reassignment import ScanState, Scope, advance_line, find_reassignments
from scadlint.core.models import DiagnosticCode, DiagnosticKind


def _source(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def test_global_reassignment_detected() -> None:
    code = _source(
        """
        x = 1;
        y = 2;
        x = 3;
        """,
    )
    warnings = find_reassignments(code)

    assert len(warnings) == 1
    warning = warnings[0]
    assert warning.kind is DiagnosticKind.REASSIGNMENT
    assert warning.code is DiagnosticCode.VARIABLE_REASSIGNMENT
    assert warning.message == "'x' was assigned on line 1 but was overwritten"
    assert code[warning.start_offset : warning.end_offset] == "x"
    assert warning.start_offset == code.rindex("x = 3")


def test_unique_assignments_not_warned() -> None:
    assert find_reassignments("x = 1;\ny = 2;\nz = 3;") == []


def test_multiple_reassignments_detected() -> None:
    code = "fn = 0;\nfs = 0.1;\nfn = 36;\nfs = 0.75;"

    assert [w.message for w in find_reassignments(code)] == [
        "'fn' was assigned on line 1 but was overwritten",
        "'fs' was assigned on line 2 but was overwritten",
    ]


def test_repeated_reassignment_cites_first_line() -> None:
    code = "myvar = 10;\nother = 20;\nmyvar = 30;\nmyvar = 40;"

    messages = [w.message for w in find_reassignments(code)]

    assert messages == ["'myvar' was assigned on line 1 but was overwritten"] * 2


def test_module_body_is_separate_scope() -> None:
    code = _source(
        """
        x = 1;
        module foo() {
            x = 2;
        }
        """,
    )

    assert find_reassignments(code) == []


def test_same_name_in_two_module_bodies_not_warned() -> None:
    code = _source(
        """
        module a() {
            x = 1;
        }
        module b() {
            x = 2;
        }
        """,
    )

    assert find_reassignments(code) == []


def test_reassignment_inside_module_body_detected() -> None:
    code = _source(
        """
        module a() {
            x = 1;
            x = 2;
        }
        """,
    )
    warnings = find_reassignments(code)

    assert len(warnings) == 1
    assert "line 2" in warnings[0].message


def test_bare_braces_share_enclosing_scope() -> None:
    code = _source(
        """
        {
            x = 1;
        }
        x = 2;
        """,
    )

    assert len(find_reassignments(code)) == 1


def test_inline_module_body_and_global_scope() -> None:
    code = "x = 1;\nmodule m() { x = 2; }\nx = 3;"
    warnings = find_reassignments(code)

    assert len(warnings) == 1
    assert warnings[0].start_offset == code.index("x = 3")
    assert "line 1" in warnings[0].message


def test_module_parameters_not_warned() -> None:
    code = _source(
        """
        module grid_block(
          num_x=1,
          num_y=2) {
            echo(num_x);
        }

        module pad_oversize(
          num_x=1,
          num_y=1) {
            echo(num_x);
        }
        """,
    )

    assert find_reassignments(code) == []


def test_function_parameters_not_warned() -> None:
    code = "function calc(x=1, y=2) = x + y;\nfunction other(x=1, y=2) = x * y;"

    assert find_reassignments(code) == []


def test_named_call_arguments_not_warned() -> None:
    code = _source(
        """
        size = [10, 20, 30];
        CubeWithRoundedCorner(
          size=[size.z, size.y, size.x],
          cornerRadius = 5);
        CubeWithRoundedCorner(
          size=[size.z, size.y, size.x],
          cornerRadius = 5);
        cube(size=10);
        cube(size=20);
        """,
    )

    assert find_reassignments(code) == []


def test_nested_call_arguments_not_warned() -> None:
    code = _source(
        """
        x = 1;
        translate([0, 0, 0])
        rotate([0, 90, 0])
        cube(size=[x, x, x], center=true);
        rotate([0, 90, 270])
        cube(size=[x, x, x], center=true);
        """,
    )

    assert find_reassignments(code) == []


def test_comparison_is_not_assignment() -> None:
    assert find_reassignments("x = 1;\nx == 2;") == []


def test_structural_keywords_ignored() -> None:
    assert find_reassignments("let = 1;\nlet = 2;\neach = 1;\neach = 2;") == []


def test_commented_assignments_ignored() -> None:
    assert find_reassignments("x = 1;\n// x = 2;\ny = 3;") == []
    assert find_reassignments("x = 1;\n/* x = 2; */\ny = 3;") == []
    assert find_reassignments("x = 1;\n/*\nx = 2;\nx = 3;\n*/\ny = 4;") == []


def test_code_before_inline_comment_still_checked() -> None:
    assert len(find_reassignments("x = 1;\nx = 2; // this is a comment")) == 1


def test_line_closing_block_comment_is_skipped() -> None:
    assert find_reassignments("x = 1;\n/* start\nend */ x = 2;") == []


def test_offset_after_inline_block_comment_points_at_identifier() -> None:
    code = "x = 1;\n/* c */ x = 2;"
    warnings = find_reassignments(code)

    assert len(warnings) == 1
    assert warnings[0].start_offset == code.index("x = 2")
    assert code[warnings[0].start_offset : warnings[0].end_offset] == "x"


def test_triple_slash_comment_is_line_comment() -> None:
    assert len(find_reassignments("x = 1;\n/// this is a comment\nx = 2;")) == 1


def test_global_reassignment_after_module_definitions() -> None:
    code = _source(
        """
        fa = 6;
        fs = 0.1;
        fn = 0;

        module foo() {
            echo("in foo");
        }

        module bar() {
            x = 1;
            echo(x);
        }

        fn = 36;
        fs = 0.75;
        fa = 10;
        """,
    )

    assert len(find_reassignments(code)) == 3


def test_special_variable_pattern_with_multiline_expression() -> None:
    code = _source(
        """
        /* [Model detail] */
        // minimum angle
        fa = 6;
        // minimum size
        fs = 0.1;
        // number of fragments
        fn = 0;

        module grid_block(
          num_x=1,
          num_y=2) {
            echo(num_x);
        }

        /// render with Hires
        hires=false;
        fn=$fn?$fn:$preview?36:
                                  hires?144:
                                        72;


        fs=$preview?.75:hires?.1:.2;
        fa=$preview?10:hires?.5:1;
        """,
    )
    names = sorted(w.message.split("'")[1] for w in find_reassignments(code))

    assert names == ["fa", "fn", "fs"]


def test_unbalanced_closers_are_clamped() -> None:
    assert len(find_reassignments("}\n}\n)\nx = 1;\nx = 2;")) == 1


def test_advance_line_threads_scope_state() -> None:
    state = ScanState()

    assert advance_line(state, "module m() {") == []
    assert state.scopes == [Scope(0, 0), Scope(1, 1)]
    assert state.brace_depth == 1

    advance_line(state, "  x = 1;")
    warnings = advance_line(state, "  x = 2;")
    assert len(warnings) == 1
    assert warnings[0].start_offset == len("module m() {\n  x = 1;\n  ")

    advance_line(state, "}")
    assert state.scopes == [Scope(0, 0)]
    assert state.assignments == {}
    assert state.line_number == 4


def test_signature_brace_on_following_line_opens_scope() -> None:
    state = ScanState()

    advance_line(state, "function f(a)")
    assert state.pending_scope
    advance_line(state, "{")
    assert not state.pending_scope
    assert state.current_scope.id == 1


def test_only_first_brace_after_signature_opens_scope() -> None:
    state = ScanState()

    advance_line(state, "module m() { { }")
    assert state.scopes == [Scope(0, 0), Scope(1, 1)]
    assert state.brace_depth == 1


def test_block_comment_state_carries_between_lines() -> None:
    state = ScanState()

    advance_line(state, "a = 1; /* open")
    assert state.in_block_comment
    advance_line(state, "still inside")
    assert state.in_block_comment
    advance_line(state, "closed */")
    assert not state.in_block_comment
