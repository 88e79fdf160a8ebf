"""Generation of complete wrapper files"""

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

from fortjni.types import TypeMappingError
from fortjni.codegen.arguments import (
        UnsupportedArgumentError, check_complex_cc)
from fortjni.codegen.c import bridge_function
from fortjni.codegen.java import native_declaration, workspace_query_method
from fortjni.codegen.utils import jni_prefix, remove_redundant_blank_lines

import logging

logger = logging.getLogger(__name__)


DUMMY_ELEMENT_TYPES = ("byte", "short", "int", "long", "float", "double")


def _indent(text, amount=2):
    return "\n".join(
            " " * amount + line if line.strip() else ""
            for line in text.split("\n"))


class WrapperGenerator:
    """Generates a Java class *class_name* in *package* with a native method
    for each routine, and the C file implementing these methods.

    .. attribute:: skipped

        A list of ``(routine_name, message)`` tuples for the routines that
        were left out of the last generated files because no code could be
        generated for them.

    .. automethod:: native_declaration
    .. automethod:: bridge_function
    .. automethod:: __call__
    """

    def __init__(self, package, class_name,
            complex_cc="c99",
            library_name=None,
            complex_class_package=None):
        """
        :arg complex_cc: ``"c99"`` or ``"f2c"``, the convention by which the
            FORTRAN compiler passes complex values,
            see :func:`fortjni.codegen.arguments.generate_fragments`.
        :arg library_name: *None* or the name of a native library loaded
            by a static initializer of the generated class.
        :arg complex_class_package: the Java package containing the
            ``ComplexFloat`` and ``ComplexDouble`` classes. Defaults to
            *package*.
        """
        check_complex_cc(complex_cc)

        if complex_class_package is None:
            complex_class_package = package

        self.package = package
        self.class_name = class_name
        self.complex_cc = complex_cc
        self.library_name = library_name
        self.complex_class_package = complex_class_package

        self.prefix = jni_prefix(package, class_name)
        self.skipped = []

    def native_declaration(self, routine):
        """Return the Java declarations for *routine*: the native method and,
        for routines with workspace arguments, the method allocating the
        workspaces.
        """
        result = native_declaration(routine)

        query_method = workspace_query_method(routine)
        if query_method is not None:
            result += "\n" + query_method

        return result

    def bridge_function(self, routine):
        return bridge_function(routine, self.prefix, self.complex_cc)

    def render(self, template_text, **kwargs):
        from mako.template import Template

        template = Template(template_text, strict_undefined=True)
        lines = template.render(**kwargs).split("\n")
        return "\n".join(remove_redundant_blank_lines(lines)) + "\n"

    def generate_java_class(self, declarations):
        from fortjni.codegen.templates import JAVA_CLASS_TEMPLATE

        return self.render(JAVA_CLASS_TEMPLATE,
                package=self.package,
                class_name=self.class_name,
                library_name=self.library_name,
                dummy_element_types=DUMMY_ELEMENT_TYPES,
                declarations=[_indent(decl) for decl in declarations])

    def generate_c_implementation(self, routines, bridge_functions):
        from fortjni.codegen.templates import C_IMPLEMENTATION_TEMPLATE

        xerbla_table = [
                (routine.name, ", ".join('"%s"' % arg for arg in routine.args))
                for routine in sorted(routines, key=lambda r: r.name)]
        max_arg_count = max(
                (len(routine.args) for routine in routines), default=1)

        return self.render(C_IMPLEMENTATION_TEMPLATE,
                prefix=self.prefix,
                complex_cc=self.complex_cc,
                complex_class_path=self.complex_class_package.replace(".", "/")
                + "/",
                xerbla_table=xerbla_table,
                max_arg_count=max(max_arg_count, 1),
                bridge_functions=bridge_functions)

    def __call__(self, routines):
        """Return a tuple ``(java_source, c_source)`` for the
        :class:`fortjni.Routine` instances in *routines*.

        Routines for which no code can be generated are logged, recorded
        in :attr:`skipped` and left out.
        """
        self.skipped = []

        generated = []
        declarations = []
        bridge_functions = []

        for routine in routines:
            try:
                declaration = self.native_declaration(routine)
                function = self.bridge_function(routine)
            except (TypeMappingError, UnsupportedArgumentError) as e:
                logger.error("cannot generate wrapper for %s: %s\n%s",
                        routine.name, e, routine)
                self.skipped.append((routine.name, str(e)))
                continue

            generated.append(routine)
            declarations.append(declaration)
            bridge_functions.append(function)

        logger.info("generated wrappers for %d routines (%d skipped)",
                len(generated), len(self.skipped))

        return (
                self.generate_java_class(declarations),
                self.generate_c_implementation(generated, bridge_functions))
