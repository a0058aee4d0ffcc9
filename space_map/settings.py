import os
from pathlib import Path

# Package root is directory containing this file
PROJECT_ROOT = Path(__file__).resolve().parent
DATA_DIR = PROJECT_ROOT / 'data'

# Default settings
DEFAULTS = {
    'background_star_count': 200,
    'background_min_mag': 0.5,
    'background_max_mag': 4.0,
    'background_seed': None,  # None = new random sky every run
    'constellation_max_separation_deg': 30.0,
    'constellation_max_mag': 2.0,
    'mag_label_threshold': 1.5,
    'canvas_width': 800,
    'canvas_height': 600,
    'zoom_step': 1.2,
    'export_default_size': 2000,
    'log_level': os.environ.get('SPACE_MAP_LOG_LEVEL', 'INFO'),
}
