"""C bridge functions between JNI and FORTRAN"""

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

from fortjni.codegen.arguments import generate_fragments
from fortjni.codegen.utils import Emitter, BlockEmitter


def fortran_prototype(routine, fragments):
    return "extern {} {}({});".format(
            fragments.fortran_return_type,
            routine.fortran_symbol,
            ", ".join(fragments.fortran_args))


def jni_function_name(prefix, routine):
    return "Java_{}_{}".format(prefix, routine.lower_name)


def bridge_function(routine, prefix, complex_cc="c99", fragments=None):
    """Return the C source of the JNI function implementing the native
    method of *routine*.

    :arg prefix: the mangled package and class name, see
        :func:`fortjni.codegen.utils.jni_prefix`.
    :arg fragments: a :class:`fortjni.codegen.arguments.WrapperFragments`
        instance. Generated from *routine* if not given.
    """
    if fragments is None:
        fragments = generate_fragments(routine, complex_cc)

    parameters = ["JNIEnv *env", "jclass this"] + fragments.decl_args

    code = Emitter()
    header = "JNIEXPORT {} JNICALL {}({})".format(
            fragments.return_type,
            jni_function_name(prefix, routine),
            ", ".join(parameters))

    with BlockEmitter(code, header) as body:
        body(fortran_prototype(routine, fragments))
        body("")

        for line in fragments.conversions:
            body(line)

        # picked up by xerbla_ to raise a Java exception
        body("savedEnv = env;")
        body("{}{}({});".format(
            fragments.call_pre,
            routine.fortran_symbol,
            ", ".join(fragments.call_args)))

        for line in fragments.cleanup:
            body(line)
        for line in fragments.call_post:
            body(line)

    return code.get_code()
