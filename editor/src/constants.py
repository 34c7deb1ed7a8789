"""
Mask Geometry Editor - Constants and Configuration

This module contains all constant values used throughout the engine:
- Mask point-count floors and types
- Draft input filtering thresholds
- Bezier handle and sampling defaults
- Quote/pricing defaults
- Event kinds and severities

Runtime overrides live in utils.config.EditorConfig.
"""

# ======================================================================
# MASK TYPES
# ======================================================================

MASK_TYPE_AREA = 'area'      # Closed polygon (last point joins the first)
MASK_TYPE_LINEAR = 'linear'  # Open polyline

MASK_TYPES = (MASK_TYPE_AREA, MASK_TYPE_LINEAR)

# Minimum number of points per mask type
MIN_AREA_POINTS = 3
MIN_LINEAR_POINTS = 2

# Point kinds
POINT_KIND_CORNER = 'corner'
POINT_KIND_SMOOTH = 'smooth'

# ======================================================================
# DEFAULT TRANSFORM
# ======================================================================

DEFAULT_POSITION_X = 0.0
DEFAULT_POSITION_Y = 0.0
DEFAULT_ROTATION = 0.0

# Default mask name, formatted with the 1-based mask count
DEFAULT_MASK_NAME = 'Mask {}'

# ======================================================================
# DRAFTING
# ======================================================================

# Minimum image-space distance between consecutive draft points.
# Jittery pointer input below this is dropped.
DRAFT_MIN_POINT_DISTANCE = 1.5

# Finalize needs at least a triangle
DRAFT_MIN_FINALIZE_POINTS = 3

# Douglas-Peucker tolerance used when simplifying freehand paths (pixels)
DEFAULT_SIMPLIFY_TOLERANCE = 2.0

# ======================================================================
# BEZIER
# ======================================================================

# Handle length as a fraction of the vector to each neighbour
BEZIER_HANDLE_RATIO = 0.2

# Samples per smooth segment when flattening (t = 0, 0.1, ... 1.0)
BEZIER_SAMPLE_STEPS = 10

HANDLE_IN = 'h1'
HANDLE_OUT = 'h2'

# ======================================================================
# HIT TESTING
# ======================================================================

VERTEX_HIT_THRESHOLD = 8.0   # screen pixels
EDGE_HIT_THRESHOLD = 10.0    # image pixels

# Polygons below this area (px^2) are treated as degenerate
MIN_VALID_POLYGON_AREA = 0.1

# ======================================================================
# VIEW
# ======================================================================

FIT_PADDING = 0.98
DEFAULT_DEVICE_PIXEL_RATIO = 1.0

# ======================================================================
# CALIBRATION / QUOTES
# ======================================================================

DEFAULT_PIXELS_PER_METER = 100.0

DEFAULT_MARKUP = 25.0        # percent
DEFAULT_TAX_RATE = 8.5       # percent
DEFAULT_LABOR_COST = 15.0    # per square meter

# Placeholder until the material registry provides per-material pricing
DEFAULT_MATERIAL_COST = 50.0  # per square meter

QUOTE_STATUSES = ('draft', 'sent', 'approved', 'rejected', 'completed')

# ======================================================================
# GROUPS
# ======================================================================

DEFAULT_GROUP_COLOR = '#3b82f6'

# ======================================================================
# EVENTS
# ======================================================================

EVENT_MASK_CREATED = 'mask_created'
EVENT_MATERIAL_ASSIGNED = 'material_assigned'
EVENT_MASK_DELETED = 'mask_deleted'
EVENT_SNAPSHOT_RESTORED = 'snapshot_restored'

SEVERITY_INFO = 'info'
SEVERITY_SUCCESS = 'success'

# ======================================================================
# HISTORY MANAGEMENT
# ======================================================================

# Maximum undo/redo history
MAX_HISTORY_ENTRIES = 100
