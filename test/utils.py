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

from fortjni.parser import parse_lines


# {{{ sources

DAXPY_SOURCE = """\
      SUBROUTINE DAXPY(N,DA,DX,INCX,DY,INCY)
*     .. Scalar Arguments ..
      DOUBLE PRECISION DA
      INTEGER INCX,INCY,N
*     ..
*     .. Array Arguments ..
      DOUBLE PRECISION DX(*),DY(*)
*     ..
*
*  Purpose
*  =======
*
*     constant times a vector plus a vector.
*
*  Parameters
*  ==========
*
*  N      - INTEGER.
*           On entry, N specifies the number of elements.
*           Unchanged on exit.
*
*  DA     - DOUBLE PRECISION.
*           Unchanged on exit.
*
*  DX     - DOUBLE PRECISION array of dimension ( 1 + ( N - 1 )*abs( INCX ) ).
*           Unchanged on exit.
*
*  INCX   - INTEGER.
*           Unchanged on exit.
*
*  DY     - DOUBLE PRECISION array of dimension ( 1 + ( N - 1 )*abs( INCY ) ).
*           On exit, DY contains DA*DX + DY.
*
*  INCY   - INTEGER.
*           Unchanged on exit.
*
*     .. Local Scalars ..
      INTEGER I,IX,IY,M,MP1
*     ..
      IF (N.LE.0) RETURN
      RETURN
      END
"""

DDOT_SOURCE = """\
      DOUBLE PRECISION FUNCTION DDOT(N,DX,INCX,DY,INCY)
*     .. Scalar Arguments ..
      INTEGER INCX,INCY,N
*     ..
*     .. Array Arguments ..
      DOUBLE PRECISION DX(*),DY(*)
*     ..
*
*  N      - INTEGER.
*           Unchanged on exit.
*
*  DX     - DOUBLE PRECISION array.
*           Unchanged on exit.
*
*  INCX   - INTEGER.
*           Unchanged on exit.
*
*  DY     - DOUBLE PRECISION array.
*           Unchanged on exit.
*
*  INCY   - INTEGER.
*           Unchanged on exit.
*
*     .. Local Scalars ..
      DOUBLE PRECISION DTEMP
      INTEGER I,IX,IY,M,MP1
      DDOT = 0.0d0
      RETURN
      END
"""

DSWAP_SOURCE = """\
      SUBROUTINE DSWAP(N,DX,INCX,DY,INCY)
      INTEGER INCX,INCY,N
      DOUBLE PRECISION DX(*),DY(*)
*
*  N      - INTEGER.
*           Unchanged on exit.
*
*  DX     - DOUBLE PRECISION array.
*           On exit, DX contains the elements of DY.
*
*  INCX   - INTEGER.
*           Unchanged on exit.
*
*  DY     - DOUBLE PRECISION array.
*           On exit, DY contains the elements of DX.
*
*  INCY   - INTEGER.
*           Unchanged on exit.
*
      RETURN
      END
"""

ZDOTC_SOURCE = """\
      DOUBLE COMPLEX FUNCTION ZDOTC(N,ZX,INCX,ZY,INCY)
      INTEGER INCX,INCY,N
      DOUBLE COMPLEX ZX(*),ZY(*)
*
*  N      - INTEGER.
*           Unchanged on exit.
*
*  ZX     - DOUBLE COMPLEX array.
*           Unchanged on exit.
*
*  INCX   - INTEGER.
*           Unchanged on exit.
*
*  ZY     - DOUBLE COMPLEX array.
*           Unchanged on exit.
*
*  INCY   - INTEGER.
*           Unchanged on exit.
*
      RETURN
      END
"""

ZAXPY_SOURCE = """\
      SUBROUTINE ZAXPY(N,ZA,ZX,INCX,ZY,INCY)
      DOUBLE COMPLEX ZA
      INTEGER INCX,INCY,N
      DOUBLE COMPLEX ZX(*),ZY(*)
*
*  N      - INTEGER.
*           Unchanged on exit.
*
*  ZA     - DOUBLE COMPLEX.
*           Unchanged on exit.
*
*  ZX     - DOUBLE COMPLEX array.
*           Unchanged on exit.
*
*  INCX   - INTEGER.
*           Unchanged on exit.
*
*  ZY     - DOUBLE COMPLEX array.
*           On exit, ZY is overwritten.
*
*  INCY   - INTEGER.
*           Unchanged on exit.
*
      RETURN
      END
"""

DGESV_SOURCE = """\
      SUBROUTINE DGESV( N, NRHS, A, LDA, IPIV, B, LDB, INFO )
*
*  -- LAPACK driver routine (version 3.1) --
*
*     .. Scalar Arguments ..
      INTEGER            INFO, LDA, LDB, N, NRHS
*     ..
*     .. Array Arguments ..
      INTEGER            IPIV( * )
      DOUBLE PRECISION   A( LDA, * ), B( LDB, * )
*     ..
*
*  Arguments
*  =========
*
*  N       (input) INTEGER
*          The number of linear equations.
*
*  NRHS    (input) INTEGER
*          The number of right hand sides.
*
*  A       (input/output) DOUBLE PRECISION array, dimension (LDA,N)
*
*  LDA     (input) INTEGER
*
*  IPIV    (output) INTEGER array, dimension (N)
*
*  B       (input/output) DOUBLE PRECISION array, dimension (LDB,NRHS)
*
*  LDB     (input) INTEGER
*
*  INFO    (output) INTEGER
*          = 0:  successful exit
*
      EXTERNAL           DGETRF, DGETRS, XERBLA
      INFO = 0
      RETURN
      END
"""

DSYEV_SOURCE = """\
      SUBROUTINE DSYEV( JOBZ, UPLO, N, A, LDA, W, WORK, LWORK, INFO )
*
*     .. Scalar Arguments ..
      CHARACTER          JOBZ, UPLO
      INTEGER            INFO, LDA, LWORK, N
*     ..
*     .. Array Arguments ..
      DOUBLE PRECISION   A( LDA, * ), W( * ), WORK( * )
*     ..
*
*  JOBZ    (input) CHARACTER*1
*  UPLO    (input) CHARACTER*1
*  N       (input) INTEGER
*  A       (input/output) DOUBLE PRECISION array, dimension (LDA, N)
*  LDA     (input) INTEGER
*  W       (output) DOUBLE PRECISION array, dimension (N)
*  WORK    (workspace/output) DOUBLE PRECISION array, dimension (LWORK)
*  LWORK   (input) INTEGER
*  INFO    (output) INTEGER
*
      RETURN
      END
"""

ZHEEV_SOURCE = """\
      SUBROUTINE ZHEEV( JOBZ, UPLO, N, A, LDA, W, WORK, LWORK, RWORK,
     $                  INFO )
*
*     .. Scalar Arguments ..
      CHARACTER          JOBZ, UPLO
      INTEGER            INFO, LDA, LWORK, N
*     ..
*     .. Array Arguments ..
      DOUBLE PRECISION   RWORK( * ), W( * )
      COMPLEX*16         A( LDA, * ), WORK( * )
*     ..
*
*  JOBZ    (input) CHARACTER*1
*  UPLO    (input) CHARACTER*1
*  N       (input) INTEGER
*  A       (input/output) COMPLEX*16 array, dimension (LDA, N)
*  LDA     (input) INTEGER
*  W       (output) DOUBLE PRECISION array, dimension (N)
*  WORK    (workspace/output) COMPLEX*16 array, dimension (MAX(1,LWORK))
*  LWORK   (input) INTEGER
*  RWORK   (workspace) DOUBLE PRECISION array, dimension (max(1, 3*N-2))
*  INFO    (output) INTEGER
*
      RETURN
      END
"""

# }}}


def parse_source(source, filename=None):
    return parse_lines(source.split("\n"), filename=filename)


def stripped_lines(code):
    """Return the non-blank lines of *code* without indentation."""
    return [line.strip() for line in code.split("\n") if line.strip()]


def contains_in_order(code, *snippets):
    """Check that *snippets* occur in *code* in the given order."""
    pos = 0
    for snippet in snippets:
        pos = code.find(snippet, pos)
        if pos < 0:
            return False
        pos += len(snippet)
    return True

# vim: foldmethod=marker
