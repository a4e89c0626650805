"""
tests/test_validators.py — Tests for config normalization and the preset table.
"""

import math

import pytest

from crop_presets import CROP_IDS, CROP_PRESETS, DEFAULT_CONFIG, crop_label, get_preset, presets_as_dicts
from models import CropPreset, PlantingConfig
from utils.validators import (
    apply_crop_preset,
    config_to_args,
    parse_config,
    parse_number,
    update_field,
    validate_config,
)


# ========================================
# Preset Table
# ========================================

class TestPresets:

    @pytest.mark.parametrize("crop,expected", [
        ('rice', (20, 20, 3)),
        ('maize', (60, 25, 5)),
        ('cotton', (90, 45, 4)),
        ('tomato', (60, 45, 2)),
        ('groundnut', (30, 10, 5)),
        ('wheat', (22, 5, 4)),
        ('sugarcane', (120, 60, 8)),
        ('potato', (60, 25, 10)),
        ('custom', (50, 30, 5)),
    ])
    def test_values(self, crop, expected):
        preset = CROP_PRESETS[crop]
        assert (preset.row_spacing, preset.plant_spacing, preset.planting_depth) == expected

    def test_ids_match_table(self):
        assert set(CROP_IDS) == set(CROP_PRESETS)
        assert len(CROP_IDS) == 9

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CROP_PRESETS['rice'] = CropPreset(1, 1, 1)

    def test_presets_are_frozen(self):
        with pytest.raises(AttributeError):
            CROP_PRESETS['rice'].row_spacing = 99

    def test_get_preset_unknown(self):
        assert get_preset('banana') is None

    def test_labels(self):
        assert crop_label('maize') == 'Maize (60×25 cm)'
        assert crop_label('groundnut') == 'Groundnut (30×10 cm)'
        assert crop_label('custom') == 'Custom'

    def test_presets_as_dicts(self):
        presets = presets_as_dicts()
        assert [p['crop'] for p in presets] == list(CROP_IDS)
        assert presets[0] == {
            'crop': 'rice', 'label': 'Rice (20×20 cm)',
            'row_spacing': 20, 'plant_spacing': 20, 'planting_depth': 3,
        }

    def test_default_config(self):
        assert DEFAULT_CONFIG == PlantingConfig('maize', 60, 25, 5, 500, 800)


# ========================================
# Crop Selection
# ========================================

class TestApplyCropPreset:

    def test_applies_spacing_and_depth(self):
        config = apply_crop_preset(DEFAULT_CONFIG, 'sugarcane')
        assert config.crop == 'sugarcane'
        assert config.row_spacing == 120
        assert config.plant_spacing == 60
        assert config.planting_depth == 8

    def test_keeps_field_dimensions(self):
        base = DEFAULT_CONFIG.with_values(field_width=1234, field_length=567)
        config = apply_crop_preset(base, 'rice')
        assert config.field_width == 1234
        assert config.field_length == 567

    def test_custom_keeps_numbers(self):
        base = DEFAULT_CONFIG.with_values(row_spacing=33, plant_spacing=11, planting_depth=7)
        config = apply_crop_preset(base, 'custom')
        assert config.crop == 'custom'
        assert (config.row_spacing, config.plant_spacing, config.planting_depth) == (33, 11, 7)

    def test_unknown_crop_keeps_numbers(self):
        config = apply_crop_preset(DEFAULT_CONFIG, 'banana')
        assert config.crop == 'banana'
        assert config.row_spacing == DEFAULT_CONFIG.row_spacing

    def test_does_not_mutate_input(self):
        apply_crop_preset(DEFAULT_CONFIG, 'rice')
        assert DEFAULT_CONFIG.crop == 'maize'
        assert DEFAULT_CONFIG.row_spacing == 60

    def test_custom_table(self):
        table = {'maize': CropPreset(1, 2, 3)}
        config = apply_crop_preset(DEFAULT_CONFIG, 'maize', presets=table)
        assert (config.row_spacing, config.plant_spacing, config.planting_depth) == (1, 2, 3)


# ========================================
# Field Edits and Parsing
# ========================================

class TestUpdateField:

    def test_stores_raw_value(self):
        config = update_field(DEFAULT_CONFIG, 'row_spacing', 500)
        assert config.row_spacing == 500

    def test_no_clamping(self):
        assert update_field(DEFAULT_CONFIG, 'plant_spacing', 0).plant_spacing == 0
        assert update_field(DEFAULT_CONFIG, 'planting_depth', -3).planting_depth == -3

    def test_alias(self):
        assert update_field(DEFAULT_CONFIG, 'fieldWidth', 900).field_width == 900

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            update_field(DEFAULT_CONFIG, 'crop', 'rice')


class TestParseNumber:

    def test_integral_string(self):
        value = parse_number('60')
        assert value == 60 and isinstance(value, int)

    def test_integral_float_string(self):
        value = parse_number(' 60.0 ')
        assert value == 60 and isinstance(value, int)

    def test_fractional(self):
        assert parse_number('7.5') == 7.5

    def test_numbers_pass_through(self):
        assert parse_number(3) == 3
        assert parse_number(2.5) == 2.5

    @pytest.mark.parametrize("raw", ['', '   ', 'abc', True])
    def test_rejects(self, raw):
        with pytest.raises(ValueError):
            parse_number(raw)

    def test_nan_kept_raw(self):
        assert math.isnan(parse_number('nan'))


class TestParseConfig:

    def test_defaults(self):
        config, errors = parse_config({})
        assert config == DEFAULT_CONFIG
        assert errors == {}

    def test_reads_values(self):
        config, errors = parse_config({
            'crop': 'Tomato', 'row_spacing': '70', 'plant_spacing': '40.5',
            'planting_depth': '3', 'field_width': '1000', 'field_length': '2000',
        })
        assert errors == {}
        assert config == PlantingConfig('tomato', 70, 40.5, 3, 1000, 2000)

    def test_crop_does_not_apply_preset(self):
        config, _ = parse_config({'crop': 'rice'})
        assert config.crop == 'rice'
        assert config.row_spacing == DEFAULT_CONFIG.row_spacing

    def test_camel_case_keys(self):
        config, errors = parse_config({'rowSpacing': 30, 'fieldLength': 120})
        assert errors == {}
        assert config.row_spacing == 30
        assert config.field_length == 120

    def test_bad_number_reported(self):
        config, errors = parse_config({'row_spacing': 'wide', 'field_width': '300'})
        assert 'row_spacing' in errors
        assert config.row_spacing == DEFAULT_CONFIG.row_spacing
        assert config.field_width == 300

    def test_ignores_unknown_keys(self):
        config, errors = parse_config({'csrf_token': 'abc', 'format': 'json'})
        assert config == DEFAULT_CONFIG
        assert errors == {}

    def test_args_round_trip(self):
        config = PlantingConfig('wheat', 22, 5, 4, 300, 400)
        parsed, errors = parse_config({k: str(v) for k, v in config_to_args(config).items()})
        assert errors == {}
        assert parsed == config


class TestValidateConfig:

    def test_valid(self):
        assert validate_config(DEFAULT_CONFIG) == {}

    def test_flags_non_positive(self):
        config = DEFAULT_CONFIG.with_values(row_spacing=0, planting_depth=-1)
        errors = validate_config(config)
        assert set(errors) == {'row_spacing', 'planting_depth'}

    def test_flags_unknown_crop(self):
        assert 'crop' in validate_config(DEFAULT_CONFIG.with_values(crop='banana'))

    def test_flags_non_finite(self):
        errors = validate_config(DEFAULT_CONFIG.with_values(field_width=float('inf')))
        assert 'field_width' in errors
