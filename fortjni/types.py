"""FORTRAN types and routines"""

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

from pytools import Record


__doc__ = """
Type names
----------

All types are represented by their canonical FORTRAN spelling, e.g.
``REAL*8`` or ``COMPLEX*16``. Subroutines have the return type ``VOID``.
Character variables of any explicit (or assumed) length are collapsed
into ``CHARACTER*N``.

.. autofunction:: standardize_type
.. autoclass:: TypeMappingError

Types and routines
------------------

.. autoclass:: FortranType
.. autoclass:: Routine
"""


class TypeMappingError(ValueError):
    pass


# {{{ canonical type names

DEFAULT_TYPES = {
        "BYTE": "LOGICAL*1",
        "COMPLEX": "COMPLEX*8",
        "DOUBLE COMPLEX": "COMPLEX*16",
        "DOUBLE PRECISION": "REAL*8",
        "INTEGER": "INTEGER*4",
        "LOGICAL": "LOGICAL*4",
        "REAL": "REAL*4",
        }

_CHARACTER_WITH_LENGTH_RE = re.compile(r"\ACHARACTER\*(?:[0-9]+|\(\*\))\Z")


def standardize_type(spelling):
    """Map a FORTRAN type spelling to its canonical name.

    Spellings without an entry in :data:`DEFAULT_TYPES` are returned
    unchanged (apart from whitespace normalization).
    """
    name = spelling.strip()
    name = re.sub(r"\(\s+", "(", name)
    name = re.sub(r"\s+\)", ")", name)

    if _CHARACTER_WITH_LENGTH_RE.match(name):
        return "CHARACTER*N"

    return DEFAULT_TYPES.get(name, name)

# }}}


# {{{ java/jni type tables

JAVA_SCALAR_TYPES = {
        "CHARACTER": "char",
        "CHARACTER*N": "String",
        "REAL*4": "float",
        "REAL*8": "double",
        "INTEGER*2": "short",
        "INTEGER*4": "int",
        "INTEGER*8": "long",
        "LOGICAL*1": "byte",
        "LOGICAL*2": "short",
        "LOGICAL*4": "int",
        "LOGICAL*8": "long",
        "COMPLEX*8": "ComplexFloat",
        "COMPLEX*16": "ComplexDouble",
        "VOID": "void",
        }

# Complex arrays are stored as interleaved real/imaginary parts.
JAVA_ARRAY_TYPES = {
        "REAL*4": "float[]",
        "REAL*8": "double[]",
        "INTEGER*2": "short[]",
        "INTEGER*4": "int[]",
        "INTEGER*8": "long[]",
        "LOGICAL*1": "byte[]",
        "LOGICAL*2": "short[]",
        "LOGICAL*4": "int[]",
        "LOGICAL*8": "long[]",
        "COMPLEX*8": "float[]",
        "COMPLEX*16": "double[]",
        "VOID": "void",
        }


def java_type_to_c(java_type):
    """Return the JNI type through which a value of *java_type* is passed."""
    if java_type.endswith("[]"):
        return "j%sArray" % java_type[:-2]
    elif java_type == "void":
        return "void"
    elif java_type.startswith("Complex"):
        return "jobject"
    elif java_type == "String":
        return "jstring"
    else:
        return "j" + java_type.lower()

# }}}


# {{{ fortran type

class FortranType(Record):
    """
    .. attribute:: base_type

        The canonical type name, see :func:`standardize_type`.

    .. attribute:: is_array

        Whether the argument was declared with dimensions, e.g. ``DX(*)``.

    .. attribute:: annotation

        *None* or the classification text taken from the source comments,
        such as ``"input"`` or ``"input/output"``.
    """

    def __init__(self, base_type, is_array=False, annotation=None):
        super().__init__(
                base_type=standardize_type(base_type),
                is_array=is_array,
                annotation=annotation)

    @property
    def is_void(self):
        return self.base_type == "VOID"

    @property
    def is_complex(self):
        return self.base_type.startswith("COMPLEX")

    @property
    def is_integer(self):
        return self.base_type.startswith("INTEGER")

    @property
    def has_output_annotation(self):
        return self.annotation is not None and "output" in self.annotation

    @property
    def is_output(self):
        """Whether the argument may be written to by the routine.

        An argument without any annotation counts as output. BLAS sources
        only mark arguments that are left unchanged, so everything else
        must be written back.
        """
        return self.annotation is None or "output" in self.annotation

    def to_java(self):
        if self.is_array or self.has_output_annotation:
            table = JAVA_ARRAY_TYPES
        else:
            table = JAVA_SCALAR_TYPES

        try:
            return table[self.base_type]
        except KeyError:
            raise TypeMappingError(
                    "don't know how to convert '%s' to a Java type" % self)

    def to_c(self):
        return java_type_to_c(self.to_java())

    def __str__(self):
        result = self.base_type
        if self.is_array:
            result += " (array)"
        if self.annotation is not None:
            result += " # " + self.annotation
        return result

# }}}


# {{{ routine

class Routine(Record):
    """A FORTRAN subroutine or function.

    .. attribute:: name

        The FORTRAN name, in upper case as written in the source.

    .. attribute:: args

        A tuple of argument names in call order.

    .. attribute:: arg_types

        A dictionary mapping argument names to :class:`FortranType`
        instances.

    .. attribute:: return_type

        A :class:`FortranType`. ``VOID`` for subroutines.

    .. automethod:: have_all_types
    .. automethod:: workspace_argument
    .. automethod:: workspace_size_argument
    .. automethod:: workspace_arguments
    """

    def __init__(self, name, args, arg_types=None, return_type=None):
        if arg_types is None:
            arg_types = {}
        if return_type is None:
            return_type = FortranType("VOID")

        super().__init__(
                name=name,
                args=tuple(args),
                arg_types=dict(arg_types),
                return_type=return_type)

    @property
    def is_function(self):
        return not self.return_type.is_void

    @property
    def lower_name(self):
        return self.name.lower()

    @property
    def fortran_symbol(self):
        """The link name of the routine under the usual FORTRAN mangling."""
        return self.lower_name + "_"

    def each_arg(self):
        for name in self.args:
            yield name, self.arg_types.get(name)

    def missing_types(self):
        return [name for name in self.args if name not in self.arg_types]

    def have_all_types(self):
        return not self.missing_types()

    # {{{ workspaces

    def workspace_argument(self, name):
        """Whether *name* is a workspace, i.e. ends in ``WORK`` and is
        followed by its size argument ``L`` + *name*.
        """
        if not name.endswith("WORK") or name not in self.args:
            return False

        i = self.args.index(name)
        return i < len(self.args) - 1 and self.args[i+1] == "L" + name

    def workspace_size_argument(self, name):
        if not re.match(r"\AL[A-Z]*WORK\Z", name) or name not in self.args:
            return False

        i = self.args.index(name)
        return i > 0 and self.args[i-1] == name[1:]

    def workspace_arguments(self):
        return [name for name in self.args if self.workspace_argument(name)]

    @property
    def has_workspace_query(self):
        return bool(self.workspace_arguments())

    # }}}

    @property
    def has_info_result(self):
        """Whether the ``INFO`` status argument becomes the result of the
        generated wrappers.
        """
        if not self.return_type.is_void or "INFO" not in self.args:
            return False

        info_type = self.arg_types.get("INFO")
        return info_type is not None and info_type.is_integer

    def __str__(self):
        if self.is_function:
            lines = ["%s function %s" % (self.return_type, self.name)]
        else:
            lines = ["subroutine %s" % self.name]

        for name, arg_type in self.each_arg():
            lines.append("   %s of type %s" % (name, arg_type))

        workspaces = self.workspace_arguments()
        if workspaces:
            lines.append("Workspace Arguments: " + ", ".join(workspaces))

        return "\n".join(lines)

# }}}

# vim: foldmethod=marker
