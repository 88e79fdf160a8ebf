"""Java declarations of the native methods"""

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

from fortjni.codegen.arguments import ArgumentKind, make_arguments
from fortjni.codegen.utils import Emitter, BlockEmitter

import logging

logger = logging.getLogger(__name__)


__doc__ = """
For the FORTRAN routine ::

    SUBROUTINE DAXPY(N,DA,DX,INCX,DY,INCY)
        DOUBLE PRECISION DA
        INTEGER INCX,INCY,N
        DOUBLE PRECISION DX(*),DY(*)

the native declaration is ::

    public static native void daxpy(int n, double da, double[] dx, int dxIdx,
        int incx, double[] dy, int dyIdx, int incy);

Each array is followed by an index into it at which the FORTRAN array
starts. An ``INFO`` argument becomes the return value.

.. autofunction:: java_return_type
.. autofunction:: native_declaration
.. autofunction:: workspace_query_method
"""


def java_return_type(routine):
    if routine.has_info_result:
        return "int"
    else:
        return routine.return_type.to_java()


def java_parameters(arguments, skip=frozenset()):
    """
    :arg skip: a set of (lower-case) argument names to leave out
    """
    result = []
    for arg in arguments:
        if arg.kind is ArgumentKind.INFO or arg.name in skip:
            continue

        result.append("{} {}".format(arg.java_type, arg.name))
        if arg.kind is ArgumentKind.BUFFER:
            result.append("int %sIdx" % arg.name)

    return result


def native_declaration(routine):
    """Return the declaration of the native method for *routine* as a
    string.
    """
    return "public static native {} {}({});".format(
            java_return_type(routine),
            routine.lower_name,
            ", ".join(java_parameters(make_arguments(routine))))


# {{{ workspace query

def dummy_array_name(java_type):
    return java_type.replace("[]", "Dummy")


def java_element_type(java_type):
    assert java_type.endswith("[]")
    return java_type[:-2]


def workspace_query_method(routine):
    """Return a Java method for *routine* that allocates the workspaces
    itself, or *None* if *routine* has no workspace arguments.

    The method has the same name as the native method but lacks the
    workspace arguments, their size arguments, and ``INFO``. It first calls
    the routine with a workspace size of ``-1``, which makes LAPACK store
    the optimal workspace size in the first workspace element, then
    allocates the workspaces and calls the routine again.
    """
    workspaces = routine.workspace_arguments()
    if not workspaces:
        return None

    if not routine.has_info_result:
        logger.debug("%s has workspace arguments but no INFO result, "
                "not generating a workspace query", routine.name)
        return None

    arguments = make_arguments(routine)
    workspace_names = {name.lower() for name in workspaces}
    size_names = {"l" + name for name in workspace_names}

    def size_factor(arg):
        return "2*" if arg.fortran_type.is_complex else ""

    def call(query):
        call_args = []
        for arg in arguments:
            if arg.kind is ArgumentKind.INFO:
                continue

            if arg.name in size_names:
                call_args.append("-1" if query else arg.name)
            elif arg.kind is ArgumentKind.BUFFER:
                if arg.name in workspace_names:
                    call_args.extend([arg.name, "0"])
                elif query:
                    call_args.extend([dummy_array_name(arg.java_type), "0"])
                else:
                    call_args.extend([arg.name, "%sIdx" % arg.name])
            else:
                call_args.append(arg.name)

        return "{}({})".format(routine.lower_name, ", ".join(call_args))

    code = Emitter()
    signature = "public static {} {}({})".format(
            java_return_type(routine),
            routine.lower_name,
            ", ".join(java_parameters(
                arguments, skip=workspace_names | size_names)))

    with BlockEmitter(code, signature, inline_brace=True) as body:
        body("int info;")
        for arg in arguments:
            if arg.name in workspace_names:
                body("{} {} = new {}[{}];".format(
                    arg.java_type, arg.name, java_element_type(arg.java_type),
                    "2" if arg.fortran_type.is_complex else "1"))
            elif arg.name in size_names:
                body("{} {};".format(arg.java_type, arg.name))

        body("info = %s;" % call(query=True))
        body("if (info != 0)")
        body.indent()
        body("return info;")
        body.dedent()

        for arg in arguments:
            if arg.name in workspace_names:
                body("l{} = (int) {}[0]; {} = new {}[{}l{}];".format(
                    arg.name, arg.name, arg.name,
                    java_element_type(arg.java_type), size_factor(arg),
                    arg.name))

        body("info = %s;" % call(query=False))
        body("return info;")

    return code.get_code()

# }}}

# vim: foldmethod=marker
