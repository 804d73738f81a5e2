"""Wasuremono core library: checklist state, persistence, rendering, drag.

Public API re-exports for convenient imports:
    from wasuremono import ItemStore, load, save, InteractionController, ...
"""

# Workspace & paths
from wasuremono.workspace import (
    workspace_root,
    storage_path,
    settings_path,
    load_settings,
    ensure_workspace,
)

# File I/O
from wasuremono.fileio import (
    read_text,
    read_string_map,
    read_mapping_yaml,
    replace_file,
    write_string_map,
    write_yaml_atomic,
)

# Models
from wasuremono.models import (
    Item,
    Settings,
    DEFAULT_ITEMS,
    STORAGE_KEY,
    default_items,
)

# Persistence
from wasuremono.storage import (
    BlobStore,
    FileBlobStore,
    load,
    save,
)

# Store
from wasuremono.store import (
    ItemStore,
    DELETE_PROMPT,
    RESET_PROMPT,
)

# Rendering
from wasuremono.render import (
    Renderer,
    RowRegion,
    RowView,
    ListView,
    StatusView,
    build_list,
    build_status,
    COMPLETE_MESSAGE,
    EMPTY_STATE_TEXT,
)

# Drag
from wasuremono.drag import (
    DragController,
    DragState,
    DragSurface,
    PointerEvent,
)

# Interaction
from wasuremono.controller import (
    InteractionController,
    ModalState,
)
