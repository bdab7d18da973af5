# File: blupstats/__init__.py
# Location: blupstats/blupstats/__init__.py

"""
blupstats Package.

This package provides modules for summarising how well a BLUPF90-style
phenotype file covers its pedigree: loading the renumbered pedigree and
data files, dropping missing trait records, mapping numeric IDs to
alphanumeric IDs and reporting record counts and proportions.
"""

from .version import __version__
