"""Core operations: storage, note index, concept resolution, undo/redo and card writing.

Nothing in this package imports the MCP server; tools in
``atomic_notes.tools`` wrap these operations.
"""
