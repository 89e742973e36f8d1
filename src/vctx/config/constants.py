"""Constants describing the editor's persisted state.

These mirror the host editor's own storage schema and are not
user-configurable.
"""

# =============================================================================
# Workspace storage layout
# =============================================================================

WORKSPACE_MAPPING_FILE = "workspace.json"
"""Per-workspace document holding the ``folder`` URI."""

STATE_STORE_FILE = "state.vscdb"
"""Per-workspace SQLite key-value store."""

FILE_URI_PREFIX = "file://"

# =============================================================================
# State store keys
# =============================================================================

EDITOR_LAYOUT_KEY = "memento/workbench.parts.editor"
"""Serialized editor grid: groups, tabs, sticky counts, MRU order."""

TEXT_EDITOR_STATE_KEY = "memento/workbench.editors.files.textFileEditor"
"""Per-file view state including cursor and selection descriptors."""

# =============================================================================
# Editor input type ids
# =============================================================================

FILE_EDITOR_TYPE = "workbench.editors.files.fileEditorInput"
TERMINAL_EDITOR_TYPE = "workbench.editors.terminal"
