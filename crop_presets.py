"""
crop_presets.py — Static crop preset table.

Each crop maps to its default row spacing, plant spacing and planting depth
(cm). Selecting any crop except "custom" seeds the planner with these values.
The table is read-only (MappingProxyType over frozen dataclasses).
"""

from types import MappingProxyType

from models import CropPreset, PlantingConfig


CUSTOM_CROP = 'custom'

# Display order for selectors and the presets API
CROP_IDS = (
    'rice', 'maize', 'cotton', 'tomato', 'groundnut',
    'wheat', 'sugarcane', 'potato', CUSTOM_CROP,
)

CROP_PRESETS = MappingProxyType({
    'rice': CropPreset(row_spacing=20, plant_spacing=20, planting_depth=3),
    'maize': CropPreset(row_spacing=60, plant_spacing=25, planting_depth=5),
    'cotton': CropPreset(row_spacing=90, plant_spacing=45, planting_depth=4),
    'tomato': CropPreset(row_spacing=60, plant_spacing=45, planting_depth=2),
    'groundnut': CropPreset(row_spacing=30, plant_spacing=10, planting_depth=5),
    'wheat': CropPreset(row_spacing=22, plant_spacing=5, planting_depth=4),
    'sugarcane': CropPreset(row_spacing=120, plant_spacing=60, planting_depth=8),
    'potato': CropPreset(row_spacing=60, plant_spacing=25, planting_depth=10),
    CUSTOM_CROP: CropPreset(row_spacing=50, plant_spacing=30, planting_depth=5),
})

# Planner state on first load
DEFAULT_CONFIG = PlantingConfig(
    crop='maize',
    row_spacing=60,
    plant_spacing=25,
    planting_depth=5,
    field_width=500,
    field_length=800,
)


def get_preset(crop):
    """Return the CropPreset for a crop id, or None if unknown."""
    return CROP_PRESETS.get(crop)


def crop_label(crop):
    """
    Human-readable label for a crop selector option.

    Examples:
        "maize"  -> "Maize (60×25 cm)"
        "custom" -> "Custom"
    """
    name = crop.capitalize()
    preset = CROP_PRESETS.get(crop)
    if crop == CUSTOM_CROP or preset is None:
        return name
    return f"{name} ({preset.row_spacing}×{preset.plant_spacing} cm)"


def presets_as_dicts():
    """List presets in display order as plain dicts (for JSON responses)."""
    return [
        {
            'crop': crop,
            'label': crop_label(crop),
            'row_spacing': CROP_PRESETS[crop].row_spacing,
            'plant_spacing': CROP_PRESETS[crop].plant_spacing,
            'planting_depth': CROP_PRESETS[crop].planting_depth,
        }
        for crop in CROP_IDS
    ]
