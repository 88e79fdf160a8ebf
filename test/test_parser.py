#! /usr/bin/env python

import pytest
import sys

from fortjni.parser import (
        ParseError, AnnotationWarning, BlasAnnotationTracker,
        join_continuations, parse_lines, parse_file)

from utils import (
        DAXPY_SOURCE, DDOT_SOURCE, DGESV_SOURCE, DSYEV_SOURCE, ZHEEV_SOURCE,
        ZDOTC_SOURCE, parse_source)


__copyright__ = "Copyright (C) 2024 The fortjni authors"

__license__ = """
Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
THE SOFTWARE.
"""



# {{{ continuation lines

CONTINUED_LINES = [
        "      SUBROUTINE DGEEV( JOBVL, JOBVR, N, A, LDA, WR, WI, VL, LDVL,\n",
        "     $                  VR, LDVR, WORK, LWORK, INFO )\n",
        "      INTEGER            INFO, LDA, LDVL, LDVR, LWORK, N\n",
        ]


def test_join_continuations():
    joined = join_continuations(CONTINUED_LINES)

    assert joined == [
            "      SUBROUTINE DGEEV( JOBVL, JOBVR, N, A, LDA, WR, WI, VL, "
            "LDVL, VR, LDVR, WORK, LWORK, INFO )",
            "      INTEGER            INFO, LDA, LDVL, LDVR, LWORK, N",
            ]


def test_join_continuations_is_confluent():
    joined = join_continuations(CONTINUED_LINES)
    assert join_continuations(joined) == joined


def test_continuation_without_preceding_line():
    with pytest.raises(ParseError):
        join_continuations(["     $   N, INFO )"])


def test_continued_header_parses_like_single_line():
    continued = parse_source(ZHEEV_SOURCE)
    single = parse_source(
            ZHEEV_SOURCE.replace("RWORK,\n     $                  INFO",
                "RWORK, INFO"))

    assert continued == single
    assert continued.args[-2:] == ("RWORK", "INFO")

# }}}


# {{{ declarations

def test_parse_blas_subroutine():
    routine = parse_source(DAXPY_SOURCE)

    assert routine.name == "DAXPY"
    assert routine.args == ("N", "DA", "DX", "INCX", "DY", "INCY")
    assert not routine.is_function
    assert len(routine.args) == len(routine.arg_types)

    types = routine.arg_types
    assert types["DA"].base_type == "REAL*8"
    assert not types["DA"].is_array
    assert types["DX"].is_array
    assert types["N"].base_type == "INTEGER*4"

    # locals are not recorded
    assert "MP1" not in types

    # BLAS marks the arguments left unchanged
    for name in ["N", "DA", "DX", "INCX", "INCY"]:
        assert types[name].annotation == "input"
    assert types["DY"].annotation is None
    assert types["DY"].is_output


def test_parse_blas_function():
    routine = parse_source(DDOT_SOURCE)

    assert routine.name == "DDOT"
    assert routine.is_function
    assert routine.return_type.base_type == "REAL*8"
    assert "DTEMP" not in routine.arg_types


def test_parse_complex_function():
    routine = parse_source(ZDOTC_SOURCE)

    assert routine.return_type.base_type == "COMPLEX*16"
    assert routine.arg_types["ZX"].base_type == "COMPLEX*16"
    assert routine.arg_types["ZX"].is_array


def test_parse_lapack_annotations():
    routine = parse_source(DGESV_SOURCE)

    assert routine.args == (
            "N", "NRHS", "A", "LDA", "IPIV", "B", "LDB", "INFO")
    assert len(routine.args) == len(routine.arg_types)

    types = routine.arg_types
    assert types["A"].annotation == "input/output"
    assert types["A"].is_array
    assert types["IPIV"].annotation == "output"
    assert types["IPIV"].base_type == "INTEGER*4"
    assert types["LDA"].annotation == "input"
    assert types["INFO"].annotation == "output"

    assert routine.has_info_result


def test_parse_workspaces():
    routine = parse_source(DSYEV_SOURCE)

    assert routine.arg_types["JOBZ"].base_type == "CHARACTER"
    assert routine.arg_types["WORK"].annotation == "workspace/output"
    assert routine.workspace_arguments() == ["WORK"]

    routine = parse_source(ZHEEV_SOURCE)
    assert routine.workspace_arguments() == ["WORK"]
    assert routine.arg_types["RWORK"].annotation == "workspace"


def test_annotation_of_unknown_argument_warns():
    source = DGESV_SOURCE.replace(
            "*  LDB     (input) INTEGER",
            "*  LDB,LDX (input) INTEGER")

    with pytest.warns(AnnotationWarning):
        routine = parse_source(source)

    assert routine.arg_types["LDB"].annotation == "input"


def test_parse_file(tmp_path):
    filename = tmp_path / "daxpy.f"
    filename.write_text(DAXPY_SOURCE, encoding="latin-1")

    assert parse_file(str(filename)) == parse_source(DAXPY_SOURCE)

# }}}


# {{{ blas annotation tracking

def test_blas_tracker():
    tracker = BlasAnnotationTracker()
    assert tracker.is_idle
    assert tracker.finish() is None

    tracker.start("N")
    assert not tracker.is_idle

    # a new argument abandons the pending one
    tracker.start("DX")
    assert tracker.finish() == "DX"
    assert tracker.is_idle
    assert tracker.finish() is None


def test_unchanged_on_exit_only_marks_pending_argument():
    source = DAXPY_SOURCE.replace(
            "*  INCY   - INTEGER.\n",
            "*  INCY   - INTEGER.\n*           Unchanged on exit.\n")

    routine = parse_source(source)
    assert routine.arg_types["INCY"].annotation == "input"
    assert routine.arg_types["DY"].annotation is None

# }}}


# {{{ structural errors

def test_no_header():
    with pytest.raises(ParseError) as exc_info:
        parse_lines(["*  just a comment", "      INTEGER N"],
                filename="empty.f")

    assert exc_info.value.filename == "empty.f"


def test_second_header():
    with pytest.raises(ParseError) as exc_info:
        parse_source(DAXPY_SOURCE + DDOT_SOURCE, filename="both.f")

    assert exc_info.value.routine_name == "DAXPY"
    assert "both.f" in str(exc_info.value)


def test_declaration_before_header():
    with pytest.raises(ParseError):
        parse_source("      INTEGER N\n" + DAXPY_SOURCE)


def test_annotation_before_header():
    with pytest.raises(ParseError):
        parse_source("*  N       (input) INTEGER\n" + DGESV_SOURCE)


def test_missing_types():
    source = DAXPY_SOURCE.replace("      DOUBLE PRECISION DA\n", "")

    with pytest.raises(ParseError) as exc_info:
        parse_source(source, filename="daxpy.f")

    assert "DA" in str(exc_info.value)
    assert exc_info.value.routine_name == "DAXPY"

# }}}


if __name__ == "__main__":
    if len(sys.argv) > 1:
        exec(sys.argv[1])
    else:
        from pytest import main
        main([__file__])

# vim: foldmethod=marker
