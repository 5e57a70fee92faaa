"""
Constants and configuration values for the drawing board.
"""

# Pen color used until the user picks a swatch
DEFAULT_COLOR = 'rgb(255, 255, 255)'

# Palette offered by the color picker
SWATCHES = [
    '#000000',
    '#ffffff',
    '#ee3333',
    '#e64980',
    '#be4bdb',
    '#893200',
    '#228be6',
    '#3333ee',
    '#40c057',
    '#00aa00',
    '#fab005',
    '#fd7e14',
]

# Stroke geometry
DEFAULT_LINE_WIDTH = 3

# Raster background after a clear (fully transparent, black underneath)
BACKGROUND_RGBA = (0, 0, 0, 0)
BACKGROUND_DISPLAY_COLOR = (0, 0, 0)

# Seconds between the solver answering and results appearing on the board
DEFAULT_DISPLAY_DELAY = 1.0

# Solving service wire format
SOLVER_ENDPOINT = '/calculate'
IMAGE_MIME_TYPE = 'image/png'
DATA_URL_PREFIX = f'data:{IMAGE_MIME_TYPE};base64,'

# Composite text shown for each solved expression
RESULT_TEXT_TEMPLATE = '{expression} = {answer}'

# Board session status values
STATUS_IDLE = 'idle'
STATUS_SUBMITTING = 'submitting'
STATUS_FAILED = 'failed'
