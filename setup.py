#!/usr/bin/env python3

import setuptools

setuptools.setup (
  name                          = "mathexpr",
  version                       = "1.0",
  license                       = 'BSD',
  keywords                      = "Math symbolic expression derivative interval SymPy",
  description                   = "Symbolic math expression engine: parse, evaluate, differentiate and simplify",
  long_description              = "mathexpr parses textual mathematical expressions into an immutable expression tree which can be evaluated "
    "as real numbers, vectors or intervals with variables and functions bound in nested scopes, symbolically differentiated and simplified. "
    "Trees convert to and from SymPy expressions for cross checking and further processing.",
  long_description_content_type = "text/plain",
  py_modules                    = ['mathexpr', 'mast', 'mctx', 'merr', 'mfunc', 'mparser', 'msym', 'mvals'],
  entry_points                  = {'console_scripts': ['mathexpr = mathexpr:main']},
  classifiers                   = [
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Scientific/Engineering',
    'Topic :: Scientific/Engineering :: Mathematics',
  ],
  install_requires              = ['sympy>=1.4'],
  python_requires               = '>=3.6',
)
