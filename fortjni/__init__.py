"""fortjni root module"""

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

from fortjni.types import FortranType, Routine, TypeMappingError
from fortjni.parser import (
        ParseError, AnnotationWarning, parse_lines, parse_file)
from fortjni.codegen.wrapper import WrapperGenerator

__doc__ = """
:mod:`fortjni` reads the declarations of FORTRAN 77 routines as they appear
in the BLAS and LAPACK reference sources and generates JNI glue for them: a
``native`` method declaration for a Java class and a C bridge function that
converts the Java calling convention to the FORTRAN one.

.. autofunction:: parse_file
.. autofunction:: parse_lines
.. autoclass:: WrapperGenerator
"""

__all__ = [
        "FortranType", "Routine", "TypeMappingError",
        "ParseError", "AnnotationWarning", "parse_lines", "parse_file",
        "WrapperGenerator",
        ]
