"""
Collage Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas formats (read-only output aspect configuration)
- Percentage coordinate space and clamp ranges
- Default item settings (image and text)
- Auto-fit sizing constants
- Batch import grid placement
- Background and gradient presets
- Layout template presets
- Starter scene
"""

# ======================================================================
# COORDINATE SYSTEM
# ======================================================================

# All item geometry is expressed in percent of the canvas [0, 100]
# X-axis: 0 = left edge, 100 = right edge
# Y-axis: 0 = TOP edge, 100 = BOTTOM edge

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# ======================================================================
# CLAMP RANGES
# ======================================================================

# Crop offset of the image inside its frame (percent of frame)
CROP_MIN = -50.0
CROP_MAX = 50.0

# Zoom of the image inside its frame
ZOOM_MIN = 1.0
ZOOM_MAX = 2.0

# Inspector slider ranges (decorative, never clamped by the engine)
SCALE_SLIDER_RANGE = (0.6, 1.4)
ROTATION_SLIDER_RANGE = (-30.0, 30.0)
RADIUS_SLIDER_RANGE = (0.0, 40.0)

# ======================================================================
# CANVAS FORMATS
# ======================================================================

CANVAS_FORMATS = {
    'portrait': {'title': 'Instagram portrait 4:5', 'width': 1080, 'height': 1350},
    'square':   {'title': 'Instagram square 1:1', 'width': 1080, 'height': 1080},
    'story':    {'title': 'Instagram story 9:16', 'width': 1080, 'height': 1920},
}

DEFAULT_FORMAT = 'portrait'

# Width of the on-screen preview region; export renders it at EXPORT_PIXEL_RATIO
PREVIEW_WIDTH_PX = 540
EXPORT_PIXEL_RATIO = 2

# ======================================================================
# ITEM KINDS AND DEFAULTS
# ======================================================================

KIND_IMAGE = 'image'
KIND_TEXT = 'text'
ITEM_KINDS = (KIND_IMAGE, KIND_TEXT)

# Id prefixes per kind
ITEM_ID_PREFIX = {
    KIND_IMAGE: 'img',
    KIND_TEXT: 'text',
}

FILTER_IDS = ('none', 'mono', 'sepia', 'warm', 'cool', 'fade')
DEFAULT_FILTER = 'none'

TEXT_ALIGNMENTS = ('left', 'center', 'right')

# Fields shared by every item kind
COMMON_DEFAULTS = {
    'x': 12.0,
    'y': 12.0,
    'w': 38.0,
    'h': 32.0,
    'scale': 1.0,
    'rotation': 0.0,
    'radius': 18.0,
    'locked': False,
}

IMAGE_DEFAULTS = {
    'src': None,
    'label': 'New photo',
    'crop_x': 0.0,
    'crop_y': 0.0,
    'zoom': 1.0,
    'filter': DEFAULT_FILTER,
    'auto_size': False,
}

TEXT_DEFAULTS = {
    'text': 'New caption',
    'font': 'Inter',
    'size': 32,
    'color': '#111827',
    'background_color': '#ffffff',
    'background_opacity': 0.0,
    'border_width': 0,
    'border_color': '#111827',
    'padding': 8,
    'align': 'center',
}

# Geometry of a freshly added text box
NEW_TEXT_GEOMETRY = {'x': 18.0, 'y': 18.0, 'w': 52.0, 'h': 20.0}

# ======================================================================
# AUTO-FIT
# ======================================================================

# Width (percent) every auto-fitted image receives
AUTO_FIT_TARGET_WIDTH = 36.0
# Canvas height-per-width correction (4:5 portrait canvas)
AUTO_FIT_ASPECT_CORRECTION = 4 / 5
AUTO_FIT_MIN_HEIGHT = 20.0
AUTO_FIT_MAX_HEIGHT = 68.0

# ======================================================================
# BATCH IMPORT GRID
# ======================================================================

# Images added together are laid out on a 2-column grid
IMPORT_GRID_COLUMNS = 2
IMPORT_GRID_GAP = 4.0
IMPORT_GRID_CELL_WIDTH = 44.0
IMPORT_GRID_CELL_HEIGHT = 32.0
IMPORT_GRID_ORIGIN = 6.0

# ======================================================================
# BACKGROUNDS
# ======================================================================

BACKGROUND_COLOR = 'color'
BACKGROUND_GRADIENT = 'gradient'

DEFAULT_BACKGROUND = {'type': BACKGROUND_COLOR, 'value': '#ffffff'}

BACKGROUND_PRESETS = [
    {'id': 'soft', 'label': 'Soft Blush', 'value': '#fff1f2'},
    {'id': 'paper', 'label': 'Warm Paper', 'value': '#f8f5f2'},
    {'id': 'night', 'label': 'Night Mode', 'value': '#0f172a'},
    {'id': 'mint', 'label': 'Mint Wash', 'value': '#ecfeff'},
]

GRADIENT_PRESETS = [
    {
        'id': 'sunset',
        'label': 'Sunset',
        'value': 'linear-gradient(135deg, #f97316, #fb7185, #6366f1)',
    },
    {
        'id': 'ocean',
        'label': 'Ocean',
        'value': 'linear-gradient(135deg, #38bdf8, #0ea5e9, #1e293b)',
    },
]

# ======================================================================
# LAYOUT TEMPLATES
# ======================================================================

# Rectangles are (x, y, w, h) in percent. Image items cycle through
# 'images' in scene order; 'text' (optional) is applied to every text item.
LAYOUT_TEMPLATES = {
    'classic': {
        'title': 'Classic Grid',
        'note': '3 frames, 4:5',
        'images': [(6, 6, 42, 42), (52, 6, 42, 42), (6, 52, 88, 42)],
        'text': None,
    },
    'story': {
        'title': 'Story Stack',
        'note': 'vertical stack',
        'images': [(10, 4, 80, 28), (10, 36, 80, 28), (10, 68, 80, 28)],
        'text': None,
    },
    'editorial': {
        'title': 'Editorial',
        'note': 'bold type + 2 photos',
        'images': [(6, 32, 42, 62), (52, 32, 42, 62)],
        'text': (6, 6, 88, 20),
    },
    'polaroid': {
        'title': 'Polaroid',
        'note': 'soft frames + tape',
        'images': [(8, 8, 38, 40), (54, 12, 38, 40), (30, 50, 40, 36)],
        'text': (10, 88, 80, 10),
    },
}

# ======================================================================
# STARTER SCENE
# ======================================================================

STARTER_ITEMS = [
    {'id': 'img-1', 'kind': KIND_IMAGE, 'x': 6, 'y': 6, 'w': 40, 'h': 44, 'label': 'Morning light'},
    {'id': 'img-2', 'kind': KIND_IMAGE, 'x': 50, 'y': 10, 'w': 42, 'h': 30, 'label': 'City walk'},
    {'id': 'img-3', 'kind': KIND_IMAGE, 'x': 54, 'y': 44, 'w': 38, 'h': 38, 'label': 'Coffee break'},
    {'id': 'text-1', 'kind': KIND_TEXT, 'x': 10, 'y': 54, 'w': 40, 'h': 24, 'text': 'Weekend in Lisbon'},
]

STARTER_SELECTION = 'img-1'

# ======================================================================
# INPUT
# ======================================================================

# Key names (host-neutral) that delete the current selection
DELETE_KEYS = ('Delete', 'Backspace')

# ======================================================================
# CONFIG
# ======================================================================

CONFIG_DIR_NAME = '.collage_editor'
CONFIG_FILE_NAME = 'config.json'
AUTOSAVE_FILE_NAME = 'autosave.json'
MAX_RECENT_DRAFTS = 10
AUTOSAVE_INTERVAL_MS = 60000

# ======================================================================
# DRAFTS
# ======================================================================

# Editor modes recorded in a draft ('video' drafts also carry a clip list)
DRAFT_MODES = ('photo', 'video')
DEFAULT_DRAFT_MODE = 'photo'
DRAFT_FILE_FILTER = "Collage Draft (*.json);;All Files (*)"
EXPORT_FILE_FILTER = "PNG Image (*.png)"
IMPORT_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.webp *.gif *.bmp);;All Files (*)"

# ======================================================================
# CANVAS WIDGET
# ======================================================================

# Free space kept around the canvas inside the host widget (pixels)
CANVAS_MARGIN_PX = 24
CANVAS_HOST_BACKGROUND = '#1f2937'
SELECTION_OUTLINE_COLOR = '#6366f1'
LOCKED_OUTLINE_COLOR = '#94a3b8'
# Interval of the QTimer that drives the asyncio loop (ms)
ASYNC_PUMP_INTERVAL_MS = 10
