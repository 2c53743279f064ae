"""
jsonkit - JSON text toolkit with a structural diff engine.

Components:
    - json_tools: strict parsing, format, minify, validate, escape/unescape
    - diff: flat differ and structural line renderer
    - history: per-editor history of submitted texts
    - tui: Textual viewer for side-by-side diffs
"""

__version__ = "0.1.0"
