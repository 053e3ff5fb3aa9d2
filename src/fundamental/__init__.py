"""Fundamental: find the people and projects behind a crate's dependency tree.

Crawls the crates.io dependency graph of a package, cross-references each
dependency's GitHub repository against GitHub Sponsors / funding data, and
produces a ranked report of who could be financially supported.
"""

__version__ = "0.1.0"
