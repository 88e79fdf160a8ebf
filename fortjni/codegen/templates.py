"""Templates for the generated Java and C files"""

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

JAVA_CLASS_TEMPLATE = """\
// Generated by fortjni. Do not edit.
package ${package};

/**
 * Native BLAS and LAPACK functions.
 *
 * <p>Each FORTRAN routine is mapped to a static method of this class. For
 * each array argument, an additional parameter gives the offset from the
 * beginning of the passed array at which the FORTRAN array starts.</p>
 *
 * <p>LAPACK routines that need workspace come with an additional method of
 * the same name without the workspace arguments, which queries the optimal
 * workspace size and allocates the workspace.</p>
 */
public class ${class_name} {
% if library_name is not None:

  static {
    System.loadLibrary("${library_name}");
  }
% endif

% for element_type in dummy_element_types:
  private static ${element_type}[] ${element_type}Dummy = new ${element_type}[1];
% endfor
% for declaration in declarations:

${declaration}
% endfor
}
"""


C_IMPLEMENTATION_TEMPLATE = """\
/* Generated by fortjni. Do not edit. */
#include <stdio.h>
#include <stdarg.h>
#include <string.h>
% if complex_cc == "c99":
#include <complex.h>
% endif
#include "${prefix}.h"

#define COMPLEX_CLASS_PACKAGE "${complex_class_path}"

/* a function to create new objects */
static jobject createObject(JNIEnv *env, const char *className, const char *signature, ...)
{
  va_list args;
  jclass klass = (*env)->FindClass(env, className);
  jmethodID init = (*env)->GetMethodID(env, klass, "<init>", signature);
  jobject newObject;

  va_start(args, signature);
  newObject = (*env)->NewObjectV(env, klass, init, args);
  va_end(args);

  return newObject;
}

% if complex_cc == "f2c":
typedef struct { float real, imag; } ComplexFloat;
typedef struct { double real, imag; } ComplexDouble;

static jobject createComplexFloat(JNIEnv *env, ComplexFloat *fc)
{
  return createObject(env, COMPLEX_CLASS_PACKAGE "ComplexFloat", "(FF)V", fc->real, fc->imag);
}

static jobject createComplexDouble(JNIEnv *env, ComplexDouble *dc)
{
  return createObject(env, COMPLEX_CLASS_PACKAGE "ComplexDouble", "(DD)V", dc->real, dc->imag);
}

static void getComplexFloat(JNIEnv *env, jobject fc, ComplexFloat *result)
{
  jclass klass = (*env)->FindClass(env, COMPLEX_CLASS_PACKAGE "ComplexFloat");
  jfieldID reField = (*env)->GetFieldID(env, klass, "r", "F");
  jfieldID imField = (*env)->GetFieldID(env, klass, "i", "F");

  result->real = (*env)->GetFloatField(env, fc, reField);
  result->imag = (*env)->GetFloatField(env, fc, imField);
}

static void getComplexDouble(JNIEnv *env, jobject dc, ComplexDouble *result)
{
  jclass klass = (*env)->FindClass(env, COMPLEX_CLASS_PACKAGE "ComplexDouble");
  jfieldID reField = (*env)->GetFieldID(env, klass, "r", "D");
  jfieldID imField = (*env)->GetFieldID(env, klass, "i", "D");

  result->real = (*env)->GetDoubleField(env, dc, reField);
  result->imag = (*env)->GetDoubleField(env, dc, imField);
}
% else:
static jobject createComplexFloat(JNIEnv *env, float complex fc)
{
  return createObject(env, COMPLEX_CLASS_PACKAGE "ComplexFloat", "(FF)V", crealf(fc), cimagf(fc));
}

static jobject createComplexDouble(JNIEnv *env, double complex dc)
{
  return createObject(env, COMPLEX_CLASS_PACKAGE "ComplexDouble", "(DD)V", creal(dc), cimag(dc));
}

static float complex getComplexFloat(JNIEnv *env, jobject fc)
{
  jclass klass = (*env)->FindClass(env, COMPLEX_CLASS_PACKAGE "ComplexFloat");
  jfieldID reField = (*env)->GetFieldID(env, klass, "r", "F");
  jfieldID imField = (*env)->GetFieldID(env, klass, "i", "F");

  return (*env)->GetFloatField(env, fc, reField) + I * (*env)->GetFloatField(env, fc, imField);
}

static double complex getComplexDouble(JNIEnv *env, jobject dc)
{
  jclass klass = (*env)->FindClass(env, COMPLEX_CLASS_PACKAGE "ComplexDouble");
  jfieldID reField = (*env)->GetFieldID(env, klass, "r", "D");
  jfieldID imField = (*env)->GetFieldID(env, klass, "i", "D");

  return (*env)->GetDoubleField(env, dc, reField) + I * (*env)->GetDoubleField(env, dc, imField);
}
% endif

static void throwIllegalArgumentException(JNIEnv *env, const char *message)
{
  jclass klass = (*env)->FindClass(env, "java/lang/IllegalArgumentException");

  (*env)->ThrowNew(env, klass, message);
}

/**********************************************************************/
/*                 XERBLA function arguments                          */
/**********************************************************************/

static char *routine_names[] = {
% for name, quoted_args in xerbla_table:
  "${name}",
% endfor
  0
};

static char *routine_arguments[][${max_arg_count}] = {
% for name, quoted_args in xerbla_table:
  { ${quoted_args} },
% endfor
};

/**********************************************************************/
/*                 Our implementation of XERBLA                       */
/**********************************************************************/

static JNIEnv *savedEnv = 0;

void xerbla_(char *fct, int *info)
{
  static char name[7];
  static char buffer[256];
  int i;
  char **p;
  char **arguments = 0;

  for (i = 0; i < 6; i++) {
    if (fct[i] == ' ')
      break;
    name[i] = fct[i];
  }
  name[i] = '\\0';

  for (p = routine_names, i = 0; *p; p++, i++)
    if (!strcmp(*p, name))
      arguments = routine_arguments[i];

  if (!arguments)
    sprintf(buffer, "XERBLA: Error on argument %d for *unknown function* %s", *info, name);
  else
    sprintf(buffer, "XERBLA: Error on argument %d (%s) in %s", *info, arguments[*info-1], name);

  throwIllegalArgumentException(savedEnv, buffer);
}

/**********************************************************************/
/*                 generated functions below                          */
/**********************************************************************/
% for function in bridge_functions:

${function}
% endfor
"""
