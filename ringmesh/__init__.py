"""Direct STL generation for labelled dust-collection rings and adapters."""
from .adapter import (
    AdapterSpec,
    DiameterPair,
    adapter_from_measurements,
    build_adapter_mesh,
    calculate_diameter_pair,
)
from .analysis import MeshReport, analyze_mesh, analyze_stl
from .curved_text import TextLayout, create_curved_text_facets, layout_text
from .glyphs import GLYPHS, glyph_rects
from .mesh import FacetList, Mesh, Triangle, WindingError
from .ring import build_ring_mesh, create_revolved_shell_facets, create_ring_shell_facets, ring_angles
from .settings import RingSpec
from .sizing import (
    adapter_pair,
    calculate_dust_collection_clearance,
    calculate_inner_diameter,
    calculate_outer_diameter,
    dust_collection_clearance,
    fit_kit,
    ring_series,
    spec_from_inner_diameter,
    spec_from_outer_diameter,
)
from .stl_writer import format_ascii_stl, stl_bytes, write_ascii_stl, write_ring_stl

__version__ = "1.0.0"
