from pathlib import Path

# Project roots
ROOT = Path(__file__).resolve().parents[1]
EXAMPLES_DIR = ROOT / "data" / "examples"
OUTPUTS_DIR = ROOT / "data" / "outputs"

# Histogram defaults
# Bits kept per channel (R, G, B) when building the histogram from 8-bit images.
# 5-6-5 gives a 32x64x32 table.
HISTOGRAM_BITS = (5, 6, 5)

# Quantization defaults
# Options: "none", "median_cut"
COLOR_QUANT_METHOD = "median_cut"
MEDIAN_CUT_COLORS = 16

# Indexed PNGs can't hold more than this many palette entries
MAX_INDEXED_COLORS = 256

# Pixels matched against the palette per batch (bounds the K x N distance matrix)
MATCH_CHUNK = 4096

# JPEG/PNG default save params
DEFAULT_JPEG_QUALITY = 92
