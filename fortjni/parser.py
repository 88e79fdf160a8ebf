"""Parser for BLAS/LAPACK routine declarations"""

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

import re
from warnings import warn

from fortjni.types import FortranType, Routine

import logging

logger = logging.getLogger(__name__)


__doc__ = """
The parser is tailored to the fixed-form sources of the reference BLAS and
LAPACK implementations. The argument types are found in the declarations
following the routine header. Whether an argument is input or output is
taken from the argument documentation. LAPACK documents arguments like ::

    *  JOBVL   (input) CHARACTER*1

and the parenthesized text becomes the :attr:`~fortjni.FortranType.annotation`
of the argument. BLAS documents arguments like ::

    *  N      - INTEGER.
    *           On entry, N specifies the order of the vectors.
    *           Unchanged on exit.

and only arguments documented as unchanged are annotated, as ``"input"``.

.. autofunction:: join_continuations
.. autofunction:: parse_lines
.. autofunction:: parse_file

.. autoclass:: ParseError
.. autoclass:: AnnotationWarning
.. autoclass:: BlasAnnotationTracker
"""


class ParseError(ValueError):
    """
    .. attribute:: filename
    .. attribute:: routine_name
    """

    def __init__(self, message, filename=None, routine_name=None):
        super().__init__(message)
        self.filename = filename
        self.routine_name = routine_name

    def __str__(self):
        message = super().__str__()

        where = []
        if self.filename is not None:
            where.append("file '%s'" % self.filename)
        if self.routine_name is not None:
            where.append("routine %s" % self.routine_name)

        if where:
            return "{}: {}".format(", ".join(where), message)
        else:
            return message


class AnnotationWarning(UserWarning):
    pass


# {{{ regular expressions

# Source: FORTRAN 77 language reference, data types
TYPES = [
        r"BYTE",
        r"CHARACTER\*[0-9]+",
        r"CHARACTER\*\(\s*\*\s*\)",
        r"CHARACTER",
        r"COMPLEX(?:\*(?:8|16))?",
        r"DOUBLE\ COMPLEX",
        r"DOUBLE\ PRECISION",
        r"INTEGER(?:\*(?:2|4|8))?",
        r"LOGICAL(?:\*(?:1|2|4|8))?",
        r"REAL(?:\*(?:4|8))?",
        ]

# e.g. "      SUBROUTINE DAXPY(N,DA,DX,INCX,DY,INCY)"
SUBROUTINE_DECL_RE = re.compile(
        r"\A\s+SUBROUTINE ([A-Z0-9]+)\( *([A-Z0-9, ]+) *\)")

# e.g. "      DOUBLE PRECISION FUNCTION DDOT(N,DX,INCX,DY,INCY)"
FUNCTION_DECL_RE = re.compile(
        r"\A\s+([A-Z][A-Z0-9* ]*) FUNCTION ([A-Z0-9]+)\( *([A-Z0-9, ]+) *\)")

# e.g. "      INTEGER INCX,INCY,N"
VARIABLE_DECL_RE = re.compile(
        r"\A\s+(%s) +([A-Z,()*0-9 ]+)" % "|".join(TYPES))

# e.g. "*  LDA     (input) INTEGER"
META_COMMENT_RE = re.compile(r"\A\*\s*([A-Z0-9,]+)\s+\(([a-zA-Z/]*)\)")

# e.g. "A", but also "DX(*)" or "A( LDA, * )"
ARGUMENT_PARENS_RE = re.compile(r"[A-Z0-9]+(?: *\([A-Z, 0-9*]+\))?")
ARRAY_ARGUMENT_RE = re.compile(r"([A-Z0-9]+) *\(.*\)")

# e.g. "*  INCX   - INTEGER."
BLAS_ARGUMENT_COMMENT_START_RE = re.compile(r"\A\*\s+([A-Z]+)\s+-\s")

UNCHANGED_ON_EXIT_RE = re.compile(r"\A\*\s+Unchanged on exit\.")

# A "$" or "C" in column 6 marks a continuation line.
CONTINUATION_RE = re.compile(r"\A     [$C] *( .+)")

IDENTIFIER_RE = re.compile(r"[A-Z0-9]+")

# }}}


def join_continuations(lines, filename=None):
    """Join continued lines to logical lines. For example, ::

        #  1234567890
              SUBROUTINE DGEEVX( BALANC, JOBVL, JOBVR, SENSE, N, A, LDA, WR, WI,
             $                   VL, LDVL, VR, LDVR, ILO, IHI, SCALE, ABNRM,
             $                   RCONDE, RCONDV, WORK, LWORK, IWORK, INFO )

    becomes a single line. Trailing newlines are removed.

    :returns: a list of lines
    """
    result = []
    for line in lines:
        line = line.rstrip("\r\n")

        match = CONTINUATION_RE.match(line)
        if match is not None:
            if not result:
                raise ParseError("continuation line without preceding line",
                        filename=filename)
            result[-1] += match.group(1)
        else:
            result.append(line)

    return result


# {{{ blas comment tracking

class BlasAnnotationTracker:
    """Recognizes the BLAS convention of marking input arguments, which
    spans two comment lines: the start of an argument's documentation and,
    later, the line ``Unchanged on exit.``

    The tracker is either idle or pending on an argument name.
    :meth:`start` moves to pending, abandoning an argument that was still
    pending. :meth:`finish` returns to idle.
    """

    def __init__(self):
        self.pending = None

    @property
    def is_idle(self):
        return self.pending is None

    def start(self, name):
        self.pending = name

    def finish(self):
        """Return the pending argument name (or *None* if idle), and become
        idle.
        """
        name = self.pending
        self.pending = None
        return name

# }}}


# {{{ declaration parser

class DeclarationParser:
    """Consumes the logical lines of one source file in a single pass.

    Use :func:`parse_lines` instead of driving this directly.
    """

    def __init__(self, filename=None):
        self.filename = filename

        self.name = None
        self.args = None
        self.return_type = None
        self.arg_types = {}

        self.blas_tracker = BlasAnnotationTracker()

    def error(self, message):
        return ParseError(message, filename=self.filename,
                routine_name=self.name)

    def begin_routine(self, name, args, return_type):
        if self.name is not None:
            raise self.error("found second routine header '%s', expected "
                    "one routine per file" % name)

        self.name = name
        self.args = tuple(IDENTIFIER_RE.findall(args))
        self.return_type = return_type

        logger.debug("found routine %s(%s)", name, ", ".join(self.args))

    def require_routine(self, line):
        if self.name is None:
            raise self.error("declaration before routine header: '%s'"
                    % line.strip())

    def annotate(self, argname, annotation, line):
        arg_type = self.arg_types.get(argname)
        if arg_type is None:
            warn("cannot add annotation '{}' to argument {} in {} "
                    "(argument not defined): '{}'".format(
                        annotation, argname,
                        self.filename or self.name, line.strip()),
                    AnnotationWarning, stacklevel=3)
            return

        self.arg_types[argname] = arg_type.copy(annotation=annotation)

    def __call__(self, line):
        match = SUBROUTINE_DECL_RE.match(line)
        if match is not None:
            self.begin_routine(match.group(1), match.group(2),
                    FortranType("VOID"))
            return

        match = FUNCTION_DECL_RE.match(line)
        if match is not None:
            self.begin_routine(match.group(2), match.group(3),
                    FortranType(match.group(1)))
            return

        match = VARIABLE_DECL_RE.match(line)
        if match is not None:
            self.require_routine(line)

            type_name = match.group(1)
            for token in ARGUMENT_PARENS_RE.findall(match.group(2)):
                array_match = ARRAY_ARGUMENT_RE.match(token)
                if array_match is not None:
                    argname = array_match.group(1)
                    is_array = True
                else:
                    argname = token
                    is_array = False

                if argname in self.args:
                    logger.debug("  %s -> %s%s", argname, type_name,
                            " (array)" if is_array else "")
                    self.arg_types[argname] = FortranType(type_name, is_array)
            return

        match = META_COMMENT_RE.match(line)
        if match is not None:
            self.require_routine(line)

            annotation = match.group(2)
            for argname in match.group(1).split(","):
                if argname:
                    self.annotate(argname, annotation, line)
            return

        match = BLAS_ARGUMENT_COMMENT_START_RE.match(line)
        if match is not None:
            self.require_routine(line)
            self.blas_tracker.start(match.group(1))
            return

        if UNCHANGED_ON_EXIT_RE.match(line):
            argname = self.blas_tracker.finish()
            if argname is not None:
                self.annotate(argname, "input", line)

    def finish(self):
        if self.name is None:
            raise self.error("no SUBROUTINE or FUNCTION declaration found")

        routine = Routine(
                name=self.name,
                args=self.args,
                arg_types=self.arg_types,
                return_type=self.return_type)

        missing = routine.missing_types()
        if missing:
            raise self.error("could not find the types of arguments %s\n%s"
                    % (", ".join(missing), routine))

        return routine

# }}}


def parse_lines(lines, filename=None):
    """Parse the source lines of one file and return a
    :class:`fortjni.Routine`.

    :arg lines: an iterable of lines, possibly ending in newlines and
        possibly containing continuation lines.
    :arg filename: only used in diagnostics.
    :raises ParseError: if the file does not declare exactly one routine
        with types for all of its arguments.
    """
    parser = DeclarationParser(filename)
    for line in join_continuations(lines, filename):
        parser(line)

    return parser.finish()


def parse_file(filename):
    with open(filename, encoding="latin-1") as inf:
        return parse_lines(inf.readlines(), filename=filename)

# vim: foldmethod=marker
