#!/usr/bin/env python

if __name__ == '__main__':
    import os

    import setuptools

    ext_modules = []

    if os.environ.get('CVUTILS_CYTHONIZE') == '1':
        from Cython.Build import cythonize

        compiler_directives = {'language_level': '3'}
        if os.environ.get('CYTHON_TRACE_NOGIL') == '1':
            compiler_directives['linetrace'] = True
            compiler_directives['binding'] = True

        ext_modules = cythonize(
            [setuptools.Extension('cvutils.c', ['src/cvutils/c.py'])],
            compiler_directives=compiler_directives,
        )

    setuptools.setup(
        ext_modules=ext_modules,
    )
