"""note - a minimalist CLI note-taking tool.

Notes are dated markdown files in one folder, with an archive subfolder
for notes that should drop out of everyday listings.
"""

__version__ = "1.0.0"
