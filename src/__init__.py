"""JSDoc Docs Builder.

Extracts documentation from JSDoc comments of a JavaScript library and
assembles it into a single grouped JSON file for the docs website.
"""

__version__ = "0.1.0"
