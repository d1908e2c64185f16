"""roamclosure — transitive closure of org-roam notes and their assets."""

__version__ = "0.1.0"
