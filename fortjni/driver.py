"""Command line driver generating the JNI wrapper files"""

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

import os
import re
from hashlib import sha256

from pytools.persistent_dict import PersistentDict, NoSuchEntryError

from fortjni.version import VERSION_TEXT
from fortjni.parser import ParseError, parse_lines
from fortjni.codegen.arguments import COMPLEX_CALLING_CONVENTIONS
from fortjni.codegen.wrapper import WrapperGenerator

import logging

logger = logging.getLogger(__name__)


# These come with hand-written wrappers.
SKIPPED_SOURCES_RE = re.compile(r"(xerbla|scabs1|dsdot)", re.IGNORECASE)


# {{{ parse cache

class RoutineCache:
    """Keeps parsed :class:`fortjni.Routine` instances on disk, keyed by the
    contents of the source file they were parsed from.
    """

    def __init__(self, container_dir=None):
        self.persistent_dict = PersistentDict(
                "fortjni-routines-v%s" % VERSION_TEXT,
                container_dir=container_dir)

    @staticmethod
    def make_key(contents):
        return sha256(contents).hexdigest()

    def get(self, contents):
        try:
            return self.persistent_dict.fetch(self.make_key(contents))
        except NoSuchEntryError:
            return None

    def put(self, contents, routine):
        self.persistent_dict.store(self.make_key(contents), routine)


def parse_source(filename, cache=None):
    """Return the :class:`fortjni.Routine` declared in *filename*, using
    *cache* (a :class:`RoutineCache`) if given.

    :raises fortjni.ParseError:
    """
    with open(filename, "rb") as inf:
        contents = inf.read()

    if cache is not None:
        routine = cache.get(contents)
        if routine is not None:
            logger.debug("%s: found in cache", filename)
            return routine

    routine = parse_lines(
            contents.decode("latin-1").splitlines(),
            filename=filename)

    if cache is not None:
        cache.put(contents, routine)

    return routine

# }}}


def parse_routines(filenames, cache=None):
    """Return a list of the routines declared in *filenames*. Files that
    fail to parse are logged and skipped.
    """
    routines = []
    for filename in filenames:
        if SKIPPED_SOURCES_RE.search(os.path.basename(filename)):
            logger.info("%s: skipped", filename)
            continue

        try:
            routines.append(parse_source(filename, cache))
        except ParseError as e:
            logger.error("%s, skipping file", e)

    return routines


def output_filenames(package, class_name, here=False):
    """Return a tuple ``(java_filename, c_filename)``."""
    if here:
        return class_name + ".java", class_name + ".c"

    java_dir = os.path.join("src", "main", "java", *package.split("."))
    c_dir = os.path.join("src", "main", "c")
    return (
            os.path.join(java_dir, class_name + ".java"),
            os.path.join(c_dir, class_name + ".c"))


def write_file(filename, contents):
    dirname = os.path.dirname(filename)
    if dirname:
        os.makedirs(dirname, exist_ok=True)

    with open(filename, "w") as outf:
        outf.write(contents)

    logger.info("wrote %s", filename)


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(
            description="Generate JNI wrappers for FORTRAN 77 BLAS and LAPACK "
            "routines.")
    parser.add_argument("package", help="Java package of the generated class")
    parser.add_argument("class_name", help="name of the generated class")
    parser.add_argument("files", nargs="+", metavar="FILE",
            help="FORTRAN source files, one routine each")
    parser.add_argument("--here", action="store_true",
            help="write the generated files to the current directory")
    parser.add_argument("--force", action="store_true",
            help="do not use cached parse results")
    parser.add_argument("--complex-cc", choices=COMPLEX_CALLING_CONVENTIONS,
            default="c99",
            help="how the FORTRAN compiler passes complex values")
    parser.add_argument("--library", metavar="NAME",
            help="native library for the generated class to load")
    parser.add_argument("--cache-dir",
            help="directory of the parse cache")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s")

    cache = None if args.force else RoutineCache(args.cache_dir)
    routines = parse_routines(args.files, cache)
    logger.info("parsed %d of %d files", len(routines), len(args.files))

    generator = WrapperGenerator(args.package, args.class_name,
            complex_cc=args.complex_cc,
            library_name=args.library)
    java_source, c_source = generator(routines)

    java_filename, c_filename = output_filenames(
            args.package, args.class_name, here=args.here)
    write_file(java_filename, java_source)
    write_file(c_filename, c_source)

    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())

# vim: foldmethod=marker
