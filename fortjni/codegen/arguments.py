"""Per-argument pieces of the JNI bridge functions"""

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

from enum import Enum

from pytools import Record

from fortjni.codegen.utils import Emitter, BlockEmitter


__doc__ = """
Every argument (and the return value) of a routine is assigned an
:class:`ArgumentKind`. For each kind, the functions below contribute to a
:class:`WrapperFragments` accumulator:

* the parameters of the JNI function (:func:`add_declaration`),
* the parameters of the ``extern`` prototype of the FORTRAN routine
  (:func:`add_fortran_parameter`),
* the arguments of the FORTRAN call (:func:`add_call_argument`),
* statements before the call (:func:`add_conversion`) and after it.

.. autoclass:: ArgumentKind
.. autoclass:: Argument
.. autoclass:: WrapperFragments
.. autoclass:: BufferPin
.. autoclass:: UnsupportedArgumentError

.. autofunction:: classify
.. autofunction:: make_arguments
.. autofunction:: plan_buffer_pins
.. autofunction:: generate_fragments
"""


COMPLEX_CALLING_CONVENTIONS = ("c99", "f2c")

JAVA_PRIMITIVES = frozenset(["byte", "short", "int", "long", "float", "double"])

C99_COMPLEX_TYPES = {
        "ComplexFloat": "float complex",
        "ComplexDouble": "double complex",
        }


class UnsupportedArgumentError(TypeError):
    pass


def check_complex_cc(complex_cc):
    if complex_cc not in COMPLEX_CALLING_CONVENTIONS:
        raise ValueError("unknown complex calling convention '%s', "
                "expected one of %s"
                % (complex_cc, ", ".join(COMPLEX_CALLING_CONVENTIONS)))


# {{{ classification

class ArgumentKind(Enum):
    VOID = "void"
    INFO = "info"
    BUFFER = "buffer"
    COMPLEX = "complex"
    CHAR = "char"
    STRING = "string"
    GENERIC = "generic"


class Argument(Record):
    """
    .. attribute:: name

        The lower-case name used in Java and C. ``retval`` for the return
        value.

    .. attribute:: fortran_type
    .. attribute:: java_type
    .. attribute:: c_type
    .. attribute:: kind

        An :class:`ArgumentKind`.
    """

    def __init__(self, name, fortran_type, java_type, c_type, kind):
        super().__init__(name=name, fortran_type=fortran_type,
                java_type=java_type, c_type=c_type, kind=kind)

    @property
    def element_c_type(self):
        """For buffers, the JNI type of the elements, e.g. ``jdouble``."""
        assert self.c_type.endswith("Array")
        return self.c_type[:-len("Array")]

    @property
    def jni_type_name(self):
        """For buffers, the type name used in the JNI array functions,
        e.g. ``Double`` for ``GetDoubleArrayElements``.
        """
        return self.element_c_type[1:].capitalize()


def classify(routine, name, fortran_type):
    """Return the :class:`ArgumentKind` of the argument *name* of *routine*,
    or of the return value if *name* is *None*.

    :raises fortjni.TypeMappingError: if *fortran_type* has no Java
        counterpart.
    :raises UnsupportedArgumentError: if no kind applies.
    """
    java_type = fortran_type.to_java()

    if java_type == "void":
        return ArgumentKind.VOID
    elif name == "INFO" and routine.has_info_result:
        return ArgumentKind.INFO
    elif java_type.endswith("[]"):
        return ArgumentKind.BUFFER
    elif java_type.startswith("Complex"):
        return ArgumentKind.COMPLEX
    elif java_type == "char":
        return ArgumentKind.CHAR
    elif java_type == "String":
        return ArgumentKind.STRING
    elif java_type in JAVA_PRIMITIVES:
        return ArgumentKind.GENERIC
    else:
        raise UnsupportedArgumentError(
                "no code generation strategy for argument {} of type "
                "'{}' (Java type '{}')".format(
                    name if name is not None else "<return value>",
                    fortran_type, java_type))


def make_argument(routine, name, fortran_type):
    if fortran_type is None:
        raise UnsupportedArgumentError(
                "argument %s of %s has no type" % (name, routine.name))

    return Argument(
            name=name.lower() if name is not None else "retval",
            fortran_type=fortran_type,
            java_type=fortran_type.to_java(),
            c_type=fortran_type.to_c(),
            kind=classify(routine, name, fortran_type))


def make_arguments(routine):
    """Return a list of :class:`Argument` instances in call order."""
    return [make_argument(routine, name, fortran_type)
            for name, fortran_type in routine.each_arg()]


def make_return_value(routine):
    return make_argument(routine, None, routine.return_type)

# }}}


# {{{ fragments

class WrapperFragments:
    """Code pieces of one bridge function, as lists of strings.

    .. attribute:: return_type
    .. attribute:: fortran_return_type
    .. attribute:: decl_args
    .. attribute:: fortran_args
    .. attribute:: conversions
    .. attribute:: call_pre

        Text preceding the call, e.g. ``jdouble retval = ``.

    .. attribute:: call_args
    .. attribute:: cleanup
    .. attribute:: call_post
    """

    def __init__(self):
        self.return_type = "void"
        self.fortran_return_type = "void"
        self.decl_args = []
        self.fortran_args = []
        self.conversions = []
        self.call_pre = ""
        self.call_args = []
        self.cleanup = []
        self.call_post = []

    def __eq__(self, other):
        return (type(self) == type(other)
                and self.__dict__ == other.__dict__)

    def __ne__(self, other):
        return not self.__eq__(other)


def add_return_value(fragments, ret, complex_cc):
    kind = ret.kind

    if kind is ArgumentKind.VOID:
        fragments.return_type = "void"
        fragments.fortran_return_type = "void"

    elif kind is ArgumentKind.COMPLEX:
        fragments.return_type = "jobject"
        if complex_cc == "f2c":
            # The result is stored through a hidden first argument.
            fragments.fortran_return_type = "void"
            fragments.fortran_args.append(ret.java_type + " *")
            fragments.conversions.append(
                    "%s retval;" % ret.java_type)
            fragments.call_args.append("&retval")
            fragments.call_post.append(
                    "return create%s(env, &retval);" % ret.java_type)
        else:
            c99_type = C99_COMPLEX_TYPES[ret.java_type]
            fragments.fortran_return_type = c99_type
            fragments.call_pre = c99_type + " retval = "
            fragments.call_post.append(
                    "return create%s(env, retval);" % ret.java_type)

    elif kind is ArgumentKind.GENERIC:
        fragments.return_type = ret.c_type
        fragments.fortran_return_type = ret.c_type
        fragments.call_pre = ret.c_type + " retval = "
        fragments.call_post.append("return retval;")

    else:
        raise UnsupportedArgumentError(
                "cannot return a value of type '%s' (%s)"
                % (ret.fortran_type, kind.value))


def add_declaration(fragments, arg):
    kind = arg.kind

    if kind is ArgumentKind.INFO:
        fragments.return_type = "jint"
    elif kind is ArgumentKind.BUFFER:
        fragments.decl_args.append("%s %s" % (arg.c_type, arg.name))
        fragments.decl_args.append("jint %sIdx" % arg.name)
    elif kind in (ArgumentKind.COMPLEX, ArgumentKind.CHAR,
            ArgumentKind.STRING, ArgumentKind.GENERIC):
        fragments.decl_args.append("%s %s" % (arg.c_type, arg.name))
    else:
        raise UnsupportedArgumentError(
                "argument %s: unexpected kind '%s'" % (arg.name, kind.value))


def add_fortran_parameter(fragments, arg, complex_cc):
    kind = arg.kind

    if kind is ArgumentKind.INFO:
        fragments.fortran_args.append("int *")
    elif kind is ArgumentKind.BUFFER:
        fragments.fortran_args.append(arg.element_c_type + " *")
    elif kind is ArgumentKind.COMPLEX:
        if complex_cc == "f2c":
            fragments.fortran_args.append(arg.java_type + " *")
        else:
            fragments.fortran_args.append(
                    C99_COMPLEX_TYPES[arg.java_type] + " *")
    elif kind in (ArgumentKind.CHAR, ArgumentKind.STRING):
        fragments.fortran_args.append("char *")
    elif kind is ArgumentKind.GENERIC:
        fragments.fortran_args.append(arg.c_type + " *")
    else:
        raise UnsupportedArgumentError(
                "argument %s: unexpected kind '%s'" % (arg.name, kind.value))


def add_call_argument(fragments, arg):
    kind = arg.kind

    if kind is ArgumentKind.BUFFER:
        fragments.call_args.append("%sPtr" % arg.name)
    elif kind is ArgumentKind.COMPLEX:
        fragments.call_args.append("&%sCplx" % arg.name)
    elif kind is ArgumentKind.CHAR:
        fragments.call_args.append("&%sChr" % arg.name)
    elif kind is ArgumentKind.STRING:
        fragments.call_args.append("%sStr" % arg.name)
    elif kind in (ArgumentKind.INFO, ArgumentKind.GENERIC):
        fragments.call_args.append("&%s" % arg.name)
    else:
        raise UnsupportedArgumentError(
                "argument %s: unexpected kind '%s'" % (arg.name, kind.value))


def add_conversion(fragments, arg, complex_cc, pin=None):
    """
    :arg pin: the :class:`BufferPin` for buffer arguments.
    """
    kind = arg.kind

    if kind is ArgumentKind.INFO:
        fragments.conversions.append("int info;")
        fragments.call_post.append("return info;")

    elif kind is ArgumentKind.BUFFER:
        assert pin is not None and pin.name == arg.name
        fragments.conversions.extend(pin_buffer_code(pin))

    elif kind is ArgumentKind.COMPLEX:
        if complex_cc == "f2c":
            fragments.conversions.extend([
                "%s %sCplx;" % (arg.java_type, arg.name),
                "get{}(env, {}, &{}Cplx);".format(
                    arg.java_type, arg.name, arg.name),
                ])
        else:
            fragments.conversions.extend([
                "%s %sCplx;" % (C99_COMPLEX_TYPES[arg.java_type], arg.name),
                "{}Cplx = get{}(env, {});".format(
                    arg.name, arg.java_type, arg.name),
                ])

    elif kind is ArgumentKind.CHAR:
        # Only the first character is passed.
        fragments.conversions.append(
                "char {}Chr = (char) {};".format(arg.name, arg.name))

    elif kind is ArgumentKind.STRING:
        fragments.conversions.append(
                "char *{}Str = (char *) (*env)->GetStringUTFChars("
                "env, {}, NULL);".format(arg.name, arg.name))
        fragments.cleanup.append(
                "(*env)->ReleaseStringUTFChars(env, {}, {}Str);".format(
                    arg.name, arg.name))

    elif kind is ArgumentKind.GENERIC:
        pass

    else:
        raise UnsupportedArgumentError(
                "argument %s: unexpected kind '%s'" % (arg.name, kind.value))

# }}}


# {{{ buffer pinning

class BufferPin(Record):
    """
    .. attribute:: name
    .. attribute:: element_c_type
    .. attribute:: jni_type_name
    .. attribute:: is_complex
    .. attribute:: is_output
    .. attribute:: aliases

        Names of the buffers pinned before this one that have the same
        element type. The Java caller may pass the same array for any of
        them, in which case their pinned elements are shared.
    """


def plan_buffer_pins(buffers):
    """Return a list of :class:`BufferPin` instances, one for each of the
    :class:`Argument` instances in *buffers*, in the order given.
    """
    pinned = ()
    for arg in buffers:
        aliases = tuple(
                pin.name for pin in pinned
                if pin.element_c_type == arg.element_c_type)
        pinned = pinned + (BufferPin(
                name=arg.name,
                element_c_type=arg.element_c_type,
                jni_type_name=arg.jni_type_name,
                is_complex=arg.fortran_type.is_complex,
                is_output=arg.fortran_type.is_output,
                aliases=aliases),)

    return list(pinned)


def pin_buffer_code(pin):
    """Return the lines of C that obtain the elements of the buffer of
    *pin*, reusing the elements of an alias if the same array was passed
    for it.
    """
    name = pin.name

    code = Emitter()
    code("{} *{}PtrBase = 0, *{}Ptr = 0;".format(
        pin.element_c_type, name, name))

    with BlockEmitter(code, "if (%s)" % name, inline_brace=True) as block:
        for i, alias in enumerate(pin.aliases):
            block("{}if ((*env)->IsSameObject(env, {}, {}) == JNI_TRUE)".format(
                "else " if i else "", name, alias))
            block.indent()
            block("{}PtrBase = {}PtrBase;".format(name, alias))
            block.dedent()

        if pin.aliases:
            block("else")
            block.indent()
        block("{}PtrBase = (*env)->Get{}ArrayElements(env, {}, NULL);".format(
            name, pin.jni_type_name, name))
        if pin.aliases:
            block.dedent()

        block("{}Ptr = {}PtrBase + {}{}Idx;".format(
            name, name, "2*" if pin.is_complex else "", name))

    return code.get_lines()


def release_buffer_code(pin):
    """Return the lines of C that release the elements of the buffer of
    *pin*, and forget them for every alias sharing them.
    """
    name = pin.name

    code = Emitter()
    with BlockEmitter(code, "if (%sPtrBase)" % name,
            inline_brace=True) as block:
        block("(*env)->Release{}ArrayElements(env, {}, {}PtrBase, {});".format(
            pin.jni_type_name, name, name,
            "0" if pin.is_output else "JNI_ABORT"))
        for alias in pin.aliases:
            block("if ({}PtrBase == {}PtrBase)".format(name, alias))
            block.indent()
            block("%sPtrBase = 0;" % alias)
            block.dedent()
        block("%sPtrBase = 0;" % name)

    return code.get_lines()


def release_buffers_code(pins):
    # Release in reverse order: a later pin may share the elements of an
    # earlier one and clears the earlier base pointer when released.
    result = []
    for pin in reversed(pins):
        result.extend(release_buffer_code(pin))
    return result

# }}}


def management_order(arguments):
    """Return *arguments* with input arguments first, then output arguments.

    Output buffers are pinned after input buffers. Since buffers are released
    in reverse order, an array passed both as input and output is released
    with the output release mode, which copies back its contents.
    """
    return ([arg for arg in arguments if not arg.fortran_type.is_output]
            + [arg for arg in arguments if arg.fortran_type.is_output])


def generate_fragments(routine, complex_cc="c99"):
    """Return the :class:`WrapperFragments` of the bridge function for
    *routine*.

    :arg complex_cc: ``"c99"`` if the FORTRAN compiler passes and returns
        complex values like C99 ``double complex``, or ``"f2c"`` if complex
        results are returned through a hidden first argument.
    """
    check_complex_cc(complex_cc)

    fragments = WrapperFragments()
    add_return_value(fragments, make_return_value(routine), complex_cc)

    arguments = make_arguments(routine)
    for arg in arguments:
        add_declaration(fragments, arg)
        add_fortran_parameter(fragments, arg, complex_cc)
        add_call_argument(fragments, arg)

    managed = management_order(arguments)
    pins = plan_buffer_pins(
            [arg for arg in managed if arg.kind is ArgumentKind.BUFFER])
    name_to_pin = {pin.name: pin for pin in pins}

    for arg in managed:
        add_conversion(fragments, arg, complex_cc, name_to_pin.get(arg.name))

    fragments.cleanup = release_buffers_code(pins) + fragments.cleanup

    return fragments

# vim: foldmethod=marker
