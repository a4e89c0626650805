"""
utils/validators.py — Planting configuration normalization and validation.

Handles:
- Crop selection (applying a crop's preset spacing and depth)
- Direct numeric field edits (stored raw, no clamping)
- Parsing query args / form data / JSON bodies into a PlantingConfig
- Field-level validation messages for the planner page

Limits shown in the form (5–200 cm spacing, 1–30 cm depth) are a
presentation concern and are not enforced here.
"""

import math

from crop_presets import CROP_PRESETS, CUSTOM_CROP, DEFAULT_CONFIG


NUMERIC_FIELDS = (
    'row_spacing', 'plant_spacing', 'planting_depth', 'field_width', 'field_length',
)

# Alternate spellings accepted from JSON clients
FIELD_ALIASES = {
    'rowSpacing': 'row_spacing',
    'plantSpacing': 'plant_spacing',
    'plantingDepth': 'planting_depth',
    'fieldWidth': 'field_width',
    'fieldLength': 'field_length',
    'row_spacing_cm': 'row_spacing',
    'plant_spacing_cm': 'plant_spacing',
    'planting_depth_cm': 'planting_depth',
    'field_width_cm': 'field_width',
    'field_length_cm': 'field_length',
}


def apply_crop_preset(config, crop, presets=CROP_PRESETS):
    """
    Select a crop, seeding spacing and depth from its preset.

    "custom" and unknown crop ids only change the crop; the existing numeric
    fields are kept. Field dimensions are never touched.

    Returns:
        A new PlantingConfig.
    """
    preset = presets.get(crop)
    if crop == CUSTOM_CROP or preset is None:
        return config.with_values(crop=crop)

    return config.with_values(
        crop=crop,
        row_spacing=preset.row_spacing,
        plant_spacing=preset.plant_spacing,
        planting_depth=preset.planting_depth,
    )


def update_field(config, name, value):
    """Store a raw numeric value for one field. Returns a new PlantingConfig."""
    name = FIELD_ALIASES.get(name, name)
    if name not in NUMERIC_FIELDS:
        raise ValueError(f"Unknown planting field: {name}")
    return config.with_values(**{name: value})


def parse_number(raw):
    """
    Parse a user-supplied number.

    Integral values come back as int so that exports print "60" rather
    than "60.0".

    Returns:
        int or float.

    Raises:
        ValueError: raw is empty or not a number.
    """
    if isinstance(raw, bool):
        raise ValueError(f"Not a number: {raw!r}")
    if isinstance(raw, (int, float)):
        value = raw
    else:
        text = str(raw).strip()
        if not text:
            raise ValueError("Value is required")
        value = float(text)

    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def parse_config(values, base=DEFAULT_CONFIG):
    """
    Build a PlantingConfig from a mapping of raw values.

    Missing keys keep the value from `base`. A 'crop' key only sets the crop
    id; it does not apply the preset (use apply_crop_preset for that).

    Args:
        values: Mapping such as request.args, request.form or a JSON dict.
        base: Config supplying defaults for missing keys.

    Returns:
        (config, errors) where errors maps field name -> message for values
        that could not be parsed. Unparseable fields keep the base value.
    """
    config = base
    errors = {}

    crop = values.get('crop')
    if crop:
        config = config.with_values(crop=str(crop).strip().lower())

    for key in values:
        name = FIELD_ALIASES.get(key, key)
        if name not in NUMERIC_FIELDS:
            continue
        try:
            config = update_field(config, name, parse_number(values.get(key)))
        except (TypeError, ValueError):
            errors[name] = f"{name} must be a number"

    return config, errors


def validate_config(config):
    """
    Check a config for values the planner page should flag.

    Returns:
        Dict of field -> message; empty when the config is usable.
    """
    errors = {}
    if config.crop not in CROP_PRESETS:
        errors['crop'] = f"Unknown crop: {config.crop}"

    for name in NUMERIC_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            errors[name] = f"{name} must be a number"
        elif not math.isfinite(value) or value <= 0:
            errors[name] = f"{name} must be greater than 0"

    return errors


def config_to_args(config):
    """Flatten a config into query-string arguments for redirects and links."""
    return {
        'crop': config.crop,
        'row_spacing': config.row_spacing,
        'plant_spacing': config.plant_spacing,
        'planting_depth': config.planting_depth,
        'field_width': config.field_width,
        'field_length': config.field_length,
    }
