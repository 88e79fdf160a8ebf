#!/usr/bin/env python
# -*- coding: utf-8 -*-

def main():
    from setuptools import setup, find_packages

    version_dict = {}
    init_filename = "fortjni/version.py"
    exec(compile(open(init_filename, "r").read(), init_filename, "exec"),
            version_dict)

    setup(name="fortjni",
          version=version_dict["VERSION_TEXT"],
          description="JNI wrappers for FORTRAN 77 BLAS and LAPACK routines "
          "by code generation",
          long_description=open("README.rst", "rt").read(),
          license="MIT",
          classifiers=[
              "Development Status :: 3 - Alpha",
              "Intended Audience :: Developers",
              "Intended Audience :: Science/Research",
              "License :: OSI Approved :: MIT License",
              "Natural Language :: English",
              "Programming Language :: Python",
              "Programming Language :: Python :: 3",
              "Programming Language :: Java",
              "Programming Language :: C",
              "Topic :: Scientific/Engineering :: Mathematics",
              "Topic :: Software Development :: Code Generators",
              "Topic :: Software Development :: Libraries",
              ],

          packages=find_packages(include=["fortjni", "fortjni.*"]),
          python_requires="~=3.6",
          install_requires=[
              "pytools>=2020.1",
              "mako",
              ],
          extras_require={
              "test": ["pytest>=2.3"],
              },
          entry_points={
              "console_scripts": [
                  "fortjni = fortjni.driver:main",
                  ],
              },
          )


if __name__ == "__main__":
    main()
