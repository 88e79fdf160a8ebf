"""Random usefulness"""

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

from string import ascii_letters, digits

from pytools.codegen import CodeGenerator


# {{{ emitters

class Emitter(CodeGenerator):
    """Collects lines of code with indentation. Block emitters nest as
    context managers and hand their lines to the parent on exit.
    """

    def __init__(self, indent_amount=2):
        super().__init__()
        self.indent_amount = indent_amount

    def incorporate(self, sub_generator):
        for line in sub_generator.code:
            self(line)

    def get_lines(self):
        return list(self.code)

    def get_code(self):
        return "\n".join(self.code)


class BlockEmitter(Emitter):
    """Emits *header* and the indented body enclosed in braces.

    :arg inline_brace: whether the opening brace ends the header line
        rather than standing on a line of its own.
    """

    def __init__(self, parent_emitter, header, inline_brace=False):
        super().__init__(parent_emitter.indent_amount)
        self.parent_emitter = parent_emitter
        if inline_brace:
            self(header + " {")
        else:
            self(header)
            self("{")

    def __enter__(self):
        self.indent()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dedent()
        self("}")
        self.parent_emitter.incorporate(self)

# }}}


def remove_redundant_blank_lines(lines):
    def is_blank(line):
        return not line.strip()

    pending_blanks = []
    at_start = True

    result = []
    for line in lines:
        if is_blank(line):
            if not pending_blanks:
                pending_blanks.append(line)

        else:
            if not at_start:
                result.extend(pending_blanks)

            pending_blanks = []
            at_start = False

            result.append(line)

    return result


_ident_chars = set("_" + ascii_letters + digits)


def make_identifier_from_name(name, default_identifier="fortjni"):
    result = "".join([c if c in _ident_chars else "_" for c in name])
    result = result.lstrip("_")
    if not result:
        result = default_identifier
    return result


def jni_prefix(package, class_name):
    """Return the part of the JNI symbol name that precedes the method
    name for native methods of *class_name* in *package*.
    """
    return make_identifier_from_name(package + "." + class_name)

# vim: foldmethod=marker
