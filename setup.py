#!/usr/bin/env python3
# =============================================================================
#  tinystringer — setup.py  (legacy compatibility shim)
#
#  All authoritative metadata lives in pyproject.toml.
#  This file exists so that:
#
#    1.  `pip install -e .` works on older pip / setuptools that pre-date
#        PEP 660 editable installs.
#    2.  `python setup.py sdist bdist_wheel` still works for CI scripts
#        that haven't migrated to `python -m build`.
#
#  For new tooling, prefer:
#      pip install -e ".[dev]"
#      python -m build
#      python -m pytest
# =============================================================================

from setuptools import setup

# Name, version, dependencies, extras, the `tinystringer` console script and
# package discovery are all read from pyproject.toml.
setup()
